# product_form/database.py
"""
CSV file-backed product store for the local createProduct endpoint.
Writes take a file lock so concurrent requests cannot corrupt the file.

Usage:
    from product_form.database import db
    db.create_record("products", {"name": "Classic Tee", ...})
    db.list_records("products")
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import uuid

import pandas as pd
from filelock import FileLock

from product_form.config import settings


class FileBackedDB:
    """
    One CSV file per table inside data_dir. `data_dir` defaults to
    settings.DATA_DIR at call time so tests can point it somewhere else.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = Path(data_dir) if data_dir is not None else None

    @property
    def data_dir(self) -> Path:
        return self._data_dir if self._data_dir is not None else Path(settings.DATA_DIR)

    def _file_path(self, table: str) -> Path:
        if table.endswith(".csv"):
            return self.data_dir / table
        mapping = {"products": settings.PRODUCTS_FILE}
        return self.data_dir / mapping.get(table, f"{table}.csv")

    def _lock_for(self, path: Path) -> FileLock:
        return FileLock(str(path) + ".lock")

    def _read_df(self, path: Path) -> pd.DataFrame:
        if not path.exists():
            return pd.DataFrame()
        # keep_default_na=False so an empty description stays ""
        return pd.read_csv(path, dtype=str, keep_default_na=False)

    def list_records(self, table: str) -> List[Dict[str, Any]]:
        df = self._read_df(self._file_path(table))
        if df.empty:
            return []
        return df.to_dict(orient="records")

    def create_record(self, table: str, data: Dict[str, Any], id_field: str = "id") -> Dict[str, Any]:
        """
        Append a record. If id_field is missing from `data` one is generated (uuid4 hex).
        Returns the saved record (with id).
        """
        data = dict(data)
        if not data.get(id_field):
            data[id_field] = uuid.uuid4().hex
        new_row = {k: ("" if v is None else v) for k, v in data.items()}

        path = self._file_path(table)
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock_for(path):
            df = self._read_df(path)
            if df.empty:
                df = pd.DataFrame([new_row])
            else:
                df = pd.concat([df, pd.DataFrame([new_row])], ignore_index=True, sort=False)
            df.to_csv(path, index=False)
        return data


# module-level singleton for convenience
db = FileBackedDB()
