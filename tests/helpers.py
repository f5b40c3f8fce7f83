from planboard.errors import StoreFailure
from planboard.store import MemoryStore

OWNER = "user-1"
STRANGER = "user-2"


class RecordingStore(MemoryStore):
    """Memory store that records every write."""

    def __init__(self) -> None:
        super().__init__()
        self.writes = []

    def insert(self, collection, record):
        self.writes.append(("insert", collection, record.id))
        return super().insert(collection, record)

    def delete(self, collection, record_id):
        self.writes.append(("delete", collection, record_id))
        return super().delete(collection, record_id)

    def set_fields(self, collection, record_id, **values):
        self.writes.append(("set", collection, record_id))
        return super().set_fields(collection, record_id, **values)

    def push(self, collection, record_id, field, value):
        self.writes.append(("push", collection, record_id))
        return super().push(collection, record_id, field, value)

    def pull(self, collection, record_id, field, value):
        self.writes.append(("pull", collection, record_id))
        return super().pull(collection, record_id, field, value)


class FailingPushStore(MemoryStore):
    """Memory store whose array appends fail once armed."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_push = False

    def push(self, collection, record_id, field, value):
        if self.fail_push:
            raise StoreFailure("push failed")
        return super().push(collection, record_id, field, value)
