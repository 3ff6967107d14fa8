# desktask/core/config.py
import os
import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel, ValidationError
from sqlalchemy.engine import URL, make_url

from desktask.core.errors import ConfigError

log = logging.getLogger(__name__)

# ─────────────────────────────
# 설정 파일 경로 (DESKTASK_CONFIG 로 덮어쓰기 가능)
DEFAULT_CONFIG_PATH = Path("config.json")
EXAMPLE_CONFIG_PATH = Path("config.example.json")


def _config_path() -> Path:
    raw = os.getenv("DESKTASK_CONFIG", "").strip()
    return Path(raw) if raw else DEFAULT_CONFIG_PATH


class DatabaseConfig(BaseModel):
    host: str = "localhost"
    port: int = 5432
    user: str = ""
    password: str = ""
    dbname: str = ""
    # 직접 URL 지정 (sqlite 테스트, 호스팅 DB 등)
    url: Optional[str] = None


class AppConfig(BaseModel):
    database: DatabaseConfig


def _strip_outer_quotes(s: str) -> str:
    if not s:
        return s
    if (s[0] == s[-1]) and s[0] in ("'", '"', "`"):
        return s[1:-1].strip()
    return s


def mask_url(url: str) -> str:
    """로그 출력용 마스킹 (비밀번호 숨김). build_db_url 로 검증된 URL 만 받는다."""
    return make_url(url).render_as_string(hide_password=True)


def _read_first(paths: Sequence[Path]) -> tuple[Path, str]:
    for path in paths:
        try:
            return path, path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.warning("config file '%s' not found", path)
        except OSError as e:
            raise ConfigError(f"error reading config file {path}: {e}") from e
    raise ConfigError(
        "error reading config file: none of " + ", ".join(str(p) for p in paths) + " exists"
    )


def load_config(
    path: Optional[Path] = None,
    fallback: Optional[Path] = EXAMPLE_CONFIG_PATH,
) -> AppConfig:
    """
    config.json 을 읽고, 없으면 config.example.json 으로 대체한다.
    파일이 있는데 파싱에 실패하면 대체하지 않고 ConfigError.
    """
    paths = [Path(path) if path else _config_path()]
    if fallback is not None:
        paths.append(Path(fallback))

    source, raw = _read_first(paths)
    try:
        config = AppConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"error parsing config file {source}: {e}") from e

    log.info("config loaded from '%s'", source)
    return config


def build_db_url(db: DatabaseConfig) -> str:
    url = _strip_outer_quotes(os.getenv("DATABASE_URL", "").strip()) or (db.url or "").strip()

    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)

    if not url:
        url = URL.create(
            "postgresql+psycopg2",
            username=db.user,
            password=db.password,
            host=db.host,
            port=db.port,
            database=db.dbname,
            query={"sslmode": "disable"},
        ).render_as_string(hide_password=False)

    try:
        make_url(url)
    except Exception as e:
        # 원본 에러 메시지에는 비밀번호가 포함될 수 있어 그대로 싣지 않는다
        raise ConfigError("잘못된 DATABASE_URL 형식") from e

    return url
