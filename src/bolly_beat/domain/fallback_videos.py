"""Built-in result set served when the video index is unreachable."""

from bolly_beat.domain.models import VideoCandidate

FALLBACK_VIDEOS: tuple[VideoCandidate, ...] = (
    VideoCandidate(
        id="gsSfJAI6h9g",
        title="RAM AAYENGE LONG VERSION",
        channel_title="RITU'S DANCE STUDIO",
        thumbnail="https://i.ytimg.com/vi/gsSfJAI6h9g/hqdefault.jpg",
    ),
    VideoCandidate(
        id="UPDDPeF6ktU",
        title="Ram Ayenge Bhajan | Dance Video | Vishal Mishra,Payal Dev, Manoj Muntasir",
        channel_title="Apne Dance Classes",
        thumbnail="https://i.ytimg.com/vi/UPDDPeF6ktU/hqdefault.jpg",
        description="ramayengebhajan #vishalmishra #rambhajan Ram Ayenge Bhajan Vishal Mishra Payal Dev",
    ),
    VideoCandidate(
        id="LMXdTT9mPQE",
        title="Ram Aayenge X Mere Ghar Ram Aaye Hai | Dance Video | 22 January | The KDH Family",
        channel_title="The KDH Family",
        thumbnail="https://i.ytimg.com/vi/LMXdTT9mPQE/hqdefault.jpg",
        description="Ram Aayenge X Mere Ghar Ram Aaye Hai | Dance Video | 22 January | The KDH Family",
    ),
    VideoCandidate(
        id="QPxu18lMiCc",
        title="Ram Aayenge Dance || Jai Shree Ram || Ayodhya",
        channel_title="Bindass Mamta",
        thumbnail="https://i.ytimg.com/vi/QPxu18lMiCc/hqdefault.jpg",
        description="Ram Aayenge Dance || Jai Shree Ram || Ayodhya Ram Aayenge Song Details",
    ),
    VideoCandidate(
        id="kDMKiF1gFXE",
        title="RAM AAYENGE DANCE- VIShal mishra song- jai shri Ram.",
        channel_title="RITU'S DANCE STUDIO",
        thumbnail="https://i.ytimg.com/vi/kDMKiF1gFXE/hqdefault.jpg",
    ),
    VideoCandidate(
        id="BDBt2dFAP1c",
        title="Mere ghar Ram Aaye #ram #ayodhya #jalpashelatchoreography",
        channel_title="Jaltarang Dance Academy",
        thumbnail="https://i.ytimg.com/vi/BDBt2dFAP1c/hqdefault.jpg",
        description="Kindly Like Share Comment and Subscribe to Our Channel Jaltarang Dance Academy",
    ),
    VideoCandidate(
        id="o-2eoKQRVHw",
        title="Ram Ayenge || aaj gali gali avadh sajayenge || Ram mandir || Vishal Mishra",
        channel_title="Blooming Dance",
        thumbnail="https://i.ytimg.com/vi/o-2eoKQRVHw/hqdefault.jpg",
    ),
    VideoCandidate(
        id="XL2qju0HE54",
        title="Ram aayenge | Vishal Mishra | Dance | Akash Rajput Choreography | Easy steps for kids",
        channel_title="Akash Rajput _The Dance Shadow",
        thumbnail="https://i.ytimg.com/vi/XL2qju0HE54/hqdefault.jpg",
        description="#ram #ramayenge #dance #kids",
    ),
    VideoCandidate(
        id="4pmoUNwcVFQ",
        title="MERE GHAR RAM- FULL DANCE/ DIWALI Dance/ JUBIN NAUTIYAL/ BHAJAN DANCE",
        channel_title="RITU'S DANCE STUDIO",
        thumbnail="https://i.ytimg.com/vi/4pmoUNwcVFQ/hqdefault.jpg",
    ),
    VideoCandidate(
        id="o5DCiLbQZU8",
        title="Ram Ayenge | Dance Cover by Seema Gondhi | Ram Mandir Ayodhya",
        channel_title="Dance Love Passion",
        thumbnail="https://i.ytimg.com/vi/o5DCiLbQZU8/hqdefault.jpg",
        description="#rammandir #ayodhya #ramayenge Ram Ayenge Dance Tutorial by Seema Gondhi",
    ),
)
