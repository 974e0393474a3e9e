from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

from sqlmodel import Session, SQLModel, create_engine

from moviestore.config import get_settings


def _find_project_root() -> Path:
    """Walk up from this file to the directory containing pyproject.toml.

    Falls back to the working directory for non-editable installs.
    """
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / 'pyproject.toml').exists():
            return current
        current = current.parent
    return Path.cwd()


DB_DIR = _find_project_root() / 'data'
DB_URL = get_settings().database_url or f'sqlite:///{DB_DIR / "moviestore.db"}'

_connect_args = {'check_same_thread': False} if DB_URL.startswith('sqlite') else {}
engine = create_engine(DB_URL, connect_args=_connect_args)


def create_db_and_tables() -> None:
    import moviestore.models  # noqa: F401  registers all tables on metadata

    if DB_URL.startswith('sqlite:///'):
        DB_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
