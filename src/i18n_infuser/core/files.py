import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from i18n_infuser.core.errors import MetaError
from i18n_infuser.models import MetaLocaleMessage, SfcFile

logger = logging.getLogger(__name__)

SFC_SUFFIX = ".vue"


def _read_text(path: Path) -> str:
    # newline="" keeps CRLF line endings intact
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()


def collect_sfc_files(target: str | Path) -> list[SfcFile]:
    """Read a single component or every ``.vue`` file below a directory."""
    root = Path(target)
    if root.is_file():
        paths = [root]
    elif root.is_dir():
        paths = sorted(p for p in root.rglob(f"*{SFC_SUFFIX}") if p.is_file())
    else:
        raise FileNotFoundError(f"Target not found: {target}")

    logger.info("Collected %d component file(s) from %s", len(paths), root)
    return [SfcFile(path=str(p), content=_read_text(p)) for p in paths]


def write_sfc_files(files: Iterable[SfcFile]) -> int:
    written = 0
    for sfc in files:
        with Path(sfc.path).open("w", encoding="utf-8", newline="") as f:
            f.write(sfc.content)
        logger.info("Wrote %s", sfc.path)
        written += 1
    return written


def load_meta(path: str | Path) -> MetaLocaleMessage:
    meta_path = Path(path)
    try:
        return MetaLocaleMessage.model_validate_json(meta_path.read_bytes())
    except OSError as exc:
        raise MetaError(str(meta_path), exc.strerror or str(exc)) from exc
    except ValidationError as exc:
        raise MetaError(str(meta_path), str(exc)) from exc


def dump_meta(meta: MetaLocaleMessage) -> str:
    return json.dumps(meta.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"
