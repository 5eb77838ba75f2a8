from .record_store_port import RecordStorePort

__all__ = ["RecordStorePort"]
