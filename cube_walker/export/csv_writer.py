"""CSV export of the walk trace."""

import csv
from pathlib import Path
from typing import Optional, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import WalkState


class CSVWriter:
    """
    Streams the walk trace to CSV, one row per visited cell.

    Output format:
        step,move,x,y,heading
        1,10,9,0,east
        ...

    The file is created lazily on the first `append` if `open` was not
    called explicitly.
    """

    FIELDNAMES = ['step', 'move', 'x', 'y', 'heading']

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.rows_written = 0
        self._handle: Optional[TextIO] = None
        self._writer: Optional[csv.DictWriter] = None

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self) -> None:
        """Create the trace file (and its directory) and write the header."""
        if self.is_open:
            return
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.output_path.open('w', newline='')
        self._writer = csv.DictWriter(self._handle, fieldnames=self.FIELDNAMES)
        self._writer.writeheader()
        self.rows_written = 0

    def append(self, state: "WalkState") -> None:
        """Write the cells visited during one move."""
        self.open()
        rows = state.to_csv_rows()
        self._writer.writerows(rows)
        self._handle.flush()
        self.rows_written += len(rows)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._writer = None

    def __enter__(self) -> "CSVWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
