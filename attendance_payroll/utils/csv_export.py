"""
CSV export utilities
"""
import csv
import io
from typing import Dict, Iterable, List
from fastapi.responses import StreamingResponse


def stream_csv(headers: List[str], rows: Iterable[Dict], filename: str = "export.csv") -> StreamingResponse:
    """
    Stream rows as a CSV attachment

    Args:
        headers: Column headers, also the keys read from each row
        rows: Row dicts; missing keys are written as empty cells
        filename: Filename for Content-Disposition header
    """
    def generate():
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=headers, quoting=csv.QUOTE_MINIMAL, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({h: "" if row.get(h) is None else row.get(h) for h in headers})
            yield buffer.getvalue()
            buffer.seek(0)
            buffer.truncate(0)
        yield buffer.getvalue()

    return StreamingResponse(
        generate(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
