import csv
import io
from datetime import datetime, timedelta, timezone
from typing import Iterable

from buzzer.models import Submission

CSV_HEADER = ['Position', 'Name', 'TimestampISO', 'EpochMS']
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def iso_timestamp(epoch_ms: int) -> str:
    """Render epoch milliseconds as UTC ISO-8601, e.g. 2024-05-01T12:00:00.000Z."""
    moment = EPOCH + timedelta(milliseconds=epoch_ms)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def csv_filename(sid: str) -> str:
    return f"submissions_{sid}.csv"


def render_csv(leaderboard: Iterable[Submission]) -> str:
    """Ranked submissions as CSV, every field quoted, rows joined by newlines."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for position, submission in enumerate(leaderboard, start=1):
        writer.writerow([position, submission.name, iso_timestamp(submission.timestamp), submission.timestamp])
    return buf.getvalue().rstrip('\n')
