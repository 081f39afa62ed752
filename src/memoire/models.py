from __future__ import annotations

from pydantic import BaseModel

# --- Entries ---


class Entry(BaseModel):
    key: str
    value: str = ""


# --- Configuration ---


class StoreConfig(BaseModel):
    file: str = ""
    assume_yes: bool = False
    verbose: bool = False


class MemoireConfig(BaseModel):
    log_level: str = "warning"


class Config(BaseModel):
    memoire: MemoireConfig = MemoireConfig()
    store: StoreConfig = StoreConfig()
