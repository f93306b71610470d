"""MenuService: load a menu document and extract its records.

Every operation follows the same sequence: load the document, read the
required ``version``, then extract whatever the operation needs.  A missing
version is reported as ``MISSING_VERSION``; domain exceptions become
``ServiceError`` codes taken from the exception class.  Documents after the
first in a multi-document stream are reported as a warning.  Process exit
is the caller's decision.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from yamlmenu.domain.errors import YamlMenuError
from yamlmenu.domain.extract import document_root, load_all, load_file_all
from yamlmenu.domain.nodes import MappingNode, Node
from yamlmenu.domain.records import read_menu, read_start_commands, read_version
from yamlmenu.domain.sample import SAMPLE_YAML
from yamlmenu.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

SAMPLE_SOURCE = "<sample>"

MISSING_VERSION_MESSAGE = "Config does not contain version node, can't continue"

_Extractor = Callable[[MappingNode], dict[str, Any]]


class MenuService:
    """Read version, menu items, and start commands from a YAML document.

    Args:
        default_path: File used when an operation is called without a path.
            When None, the bundled sample document is used instead.
    """

    def __init__(self, default_path: Path | None = None) -> None:
        self._default_path = default_path

    # ── Public operations ─────────────────────────────────────────────

    def show(self, path: Path | None = None) -> ServiceResult:
        """Extract version, menu, and start commands together."""
        return self._run(
            "show",
            path,
            lambda root: {
                "menu": _dump_all(read_menu(root)),
                "start_commands": _dump_all(read_start_commands(root)),
            },
        )

    def menu(self, path: Path | None = None) -> ServiceResult:
        return self._run("menu", path, lambda root: {"items": _dump_all(read_menu(root))})

    def commands(self, path: Path | None = None) -> ServiceResult:
        return self._run(
            "commands",
            path,
            lambda root: {"items": _dump_all(read_start_commands(root))},
        )

    def version(self, path: Path | None = None) -> ServiceResult:
        return self._run("version", path, lambda root: {})

    # ── Internals ─────────────────────────────────────────────────────

    def _load(self, path: Path | None) -> list[Node]:
        if path is None:
            logger.debug("No input file given; using bundled sample")
            return load_all(SAMPLE_YAML)
        return load_file_all(path)

    def _run(self, op: str, path: Path | None, extract: _Extractor) -> ServiceResult:
        source_path = path if path is not None else self._default_path
        source = str(source_path) if source_path is not None else SAMPLE_SOURCE
        warnings: list[str] = []

        try:
            documents = self._load(source_path)
            root = document_root(documents)
            if len(documents) > 1:
                warnings.append(_ignored_documents_warning(source, len(documents)))
            version = read_version(root)
            if version is None:
                return _failure(op, "MISSING_VERSION", MISSING_VERSION_MESSAGE, source=source)
            data = {"source": source, "version": version, **extract(root)}
        except YamlMenuError as exc:
            logger.debug("Extraction failed for %s", source, exc_info=True)
            return _failure(op, exc.code, str(exc), source=source)
        except OSError as exc:
            msg = f"Cannot read {source}: {exc.strerror or exc}"
            return _failure(op, "READ_ERROR", msg, source=source)

        logger.debug("%s: extracted version %s from %s", op, version, source)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)


def _ignored_documents_warning(source: str, count: int) -> str:
    ignored = count - 1
    noun = "document" if ignored == 1 else "documents"
    return f"{source} holds {count} YAML documents; ignored {ignored} {noun} after the first"


def _dump_all(records: Iterable[BaseModel]) -> list[dict[str, Any]]:
    """Materialize a lazy record iterator into JSON-ready dicts."""
    return [record.model_dump(by_alias=True) for record in records]


def _failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )
