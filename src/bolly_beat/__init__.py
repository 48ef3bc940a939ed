"""Song to Bolly Beat: hear a song, get its dance videos."""
