"""Outfit storage abstractions and a SQLite document-store implementation."""
from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

from logic.validation import OutfitCreate, OutfitRecord

MUTABLE_FIELDS = {"title", "notes"}


class OutfitStore:
    """Persistence interface for outfit documents."""

    def create_outfit(self, outfit: OutfitCreate) -> OutfitRecord:
        raise NotImplementedError

    def get_outfit(self, outfit_id: str) -> Optional[OutfitRecord]:
        raise NotImplementedError

    def list_outfits(self) -> List[OutfitRecord]:
        raise NotImplementedError

    def update_outfit(self, outfit_id: str, updated_fields: Dict[str, Any]) -> Optional[OutfitRecord]:
        raise NotImplementedError

    def delete_outfit(self, outfit_id: str) -> bool:
        raise NotImplementedError


class SQLiteOutfitStore(OutfitStore):
    """Local SQLite-backed store keeping one JSON document per outfit."""

    def __init__(self, database_path: str | Path = "data/outfits.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS outfits (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    outfit_id TEXT NOT NULL UNIQUE,
                    document TEXT NOT NULL
                );
                """
            )

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> OutfitRecord:
        return OutfitRecord.model_validate({**json.loads(row["document"]), "id": row["outfit_id"]})

    def create_outfit(self, outfit: OutfitCreate) -> OutfitRecord:
        record = OutfitRecord(id=uuid4().hex, **outfit.model_dump())
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO outfits (outfit_id, document) VALUES (?, ?)",
                (record.id, record.model_dump_json(exclude={"id"})),
            )
        return record

    def get_outfit(self, outfit_id: str) -> Optional[OutfitRecord]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT outfit_id, document FROM outfits WHERE outfit_id = ?",
                (outfit_id,),
            )
            row = cursor.fetchone()
            return self._row_to_record(row) if row else None

    def list_outfits(self) -> List[OutfitRecord]:
        with self._connect() as conn:
            cursor = conn.execute("SELECT outfit_id, document FROM outfits ORDER BY seq")
            return [self._row_to_record(row) for row in cursor.fetchall()]

    def update_outfit(self, outfit_id: str, updated_fields: Dict[str, Any]) -> Optional[OutfitRecord]:
        current = self.get_outfit(outfit_id)
        if not current:
            return None

        changes = {key: value for key, value in updated_fields.items() if key in MUTABLE_FIELDS}
        updated = OutfitRecord.model_validate({**current.model_dump(), **changes})
        with self._connect() as conn:
            conn.execute(
                "UPDATE outfits SET document = ? WHERE outfit_id = ?",
                (updated.model_dump_json(exclude={"id"}), outfit_id),
            )
        return updated

    def delete_outfit(self, outfit_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM outfits WHERE outfit_id = ?", (outfit_id,))
            return cursor.rowcount > 0


__all__ = ["MUTABLE_FIELDS", "OutfitStore", "SQLiteOutfitStore"]
