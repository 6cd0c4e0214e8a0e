"""
Upload Store - study material links shared by students
"""

from datetime import datetime
from typing import Callable, List, Optional

from pydantic import ValidationError

from collegemate.core.logging_config import logger
from collegemate.schemas.uploads import StudyUpload
from collegemate.services.storage import KeyValueStore, StorageKeys


class UploadStore:

    def __init__(
        self,
        store: KeyValueStore,
        keys: Optional[StorageKeys] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.store = store
        self.keys = keys or StorageKeys()
        self.clock = clock

    def list_uploads(self) -> List[StudyUpload]:
        records = self.store.get(self.keys.uploads, [])
        uploads = []
        for record in records if isinstance(records, list) else []:
            try:
                uploads.append(StudyUpload.model_validate(record))
            except ValidationError:
                logger.warning("Skipping unreadable upload record")
        return uploads

    def add_upload(self, semester: str, subject: str, name: str, file: str) -> StudyUpload:
        upload = StudyUpload(
            id=int(self.clock().timestamp() * 1000),
            semester=semester,
            subject=subject,
            name=name,
            file=file,
        )
        records = self.store.get(self.keys.uploads, [])
        if not isinstance(records, list):
            records = []
        records.append(upload.model_dump(mode="json"))
        self.store.set(self.keys.uploads, records)

        logger.info(f"Upload added to {semester}: {subject} / {name}")
        return upload
