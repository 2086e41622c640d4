# Formats a number of seconds as MM:SS. Minutes are not wrapped into hours, so a 120 minute session reads 120:00.
def format_clock(seconds):
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


# Formats how far through a session we are as a bracketed, 3-wide, right-aligned percentage such as "[ 42%]".
def format_progress(elapsed, total):
    if total <= 0:
        percent = 0
    else:
        percent = round(100 * elapsed / total)
    return f"[{percent:3d}%]"


# Clamps a user supplied minute count to the smallest duration the timer accepts.
def clamp_minutes(minutes):
    return max(1, int(minutes))
