from datetime import datetime


def format_date(date_string: str) -> str:
    """ISO timestamp -> "Jan 5, 2025"."""
    dt = datetime.fromisoformat(date_string.replace("Z", "+00:00"))
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def share_message(title: str, company: str, location: str) -> str:
    return (
        f"Check out this job: {title} at {company} in {location}. "
        "Download JobSeeker app to apply!"
    )
