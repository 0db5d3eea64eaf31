"""Logic for loading ``*.api.json`` documents into an :class:`ApiModel`."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from mintdoc.api_item import ApiItem, ExcerptToken, Parameter
from mintdoc.api_item_kind import ApiItemKind, parse_kind
from mintdoc.api_model import ApiModel
from mintdoc.declaration_reference import DeclarationReference
from mintdoc.doc_comment import parse_doc_comment
from mintdoc.errors import ApiModelError

logger = logging.getLogger(__name__)


def load_api_document(path: Path) -> dict[str, Any]:
    """Load and parse one ``*.api.json`` document."""
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Failed to read API document: {path}"
        raise ApiModelError(
            msg, resource=str(path), operation="load_api_document", cause=e
        ) from e
    if not isinstance(doc, dict) or doc.get("kind") != "Package":
        msg = f"Not an API package document: {path}"
        raise ApiModelError(msg, resource=str(path), operation="load_api_document")
    return doc


def _token_range(
    tokens: list[ExcerptToken], rng: dict[str, Any] | None
) -> list[ExcerptToken]:
    if not rng:
        return []
    start = int(rng.get("startIndex", 0))
    end = int(rng.get("endIndex", 0))
    return tokens[start:end]


def _parse_tokens(raw_tokens: Iterable[dict[str, Any]]) -> list[ExcerptToken]:
    tokens: list[ExcerptToken] = []
    for t in raw_tokens:
        ref = t.get("canonicalReference")
        tokens.append(
            ExcerptToken(
                kind=str(t.get("kind") or "Content"),
                text=str(t.get("text") or ""),
                reference=DeclarationReference.parse(ref) if ref else None,
            )
        )
    return tokens


def build_item(raw: dict[str, Any]) -> ApiItem:
    """Build an item and, recursively, its members from a raw JSON node."""
    kind = parse_kind(str(raw.get("kind") or ""))
    name = raw.get("name")
    if kind == ApiItemKind.CONSTRUCTOR and not name:
        name = "(constructor)"
    tokens = _parse_tokens(raw.get("excerptTokens") or [])
    canonical = raw.get("canonicalReference")

    parameters = [
        Parameter(
            name=str(p.get("parameterName") or ""),
            type_tokens=tuple(_token_range(tokens, p.get("parameterTypeTokenRange"))),
            is_optional=bool(p.get("isOptional", False)),
        )
        for p in raw.get("parameters") or []
    ]
    type_range = (
        raw.get("returnTypeTokenRange")
        or raw.get("propertyTypeTokenRange")
        or raw.get("variableTypeTokenRange")
        or raw.get("typeTokenRange")
    )

    item = ApiItem(
        kind=kind,
        display_name=str(name or ""),
        overload_index=int(raw.get("overloadIndex") or 1),
        release_tag=str(raw.get("releaseTag") or "Public"),
        doc=parse_doc_comment(raw.get("docComment")),
        excerpt_tokens=tokens,
        canonical_reference=DeclarationReference.parse(canonical) if canonical else None,
        parameters=parameters,
        type_tokens=_token_range(tokens, type_range),
        initializer="".join(
            t.text for t in _token_range(tokens, raw.get("initializerTokenRange"))
        ).strip(),
        is_optional=bool(raw.get("isOptional", False)),
        is_static=bool(raw.get("isStatic", False)),
        is_readonly=bool(raw.get("isReadonly", False)),
        is_abstract=bool(raw.get("isAbstract", False)),
    )
    for member in raw.get("members") or []:
        if not isinstance(member, dict):
            continue
        try:
            item.add_member(build_item(member))
        except ValueError:
            logger.warning(
                "Skipping member of unknown kind %r in %s",
                member.get("kind"),
                item.display_name,
            )
        except TypeError:
            logger.warning(
                "Skipping member %r of %s, which cannot own members",
                member.get("name"),
                item.describe(),
            )
    return item


def load_api_model(paths: Iterable[Path]) -> ApiModel:
    """Index all API documents into a single model, sorted by file name."""
    model = ApiModel()
    for path in sorted(paths):
        doc = load_api_document(path)
        try:
            package = build_item(doc)
            model.add_package(package)
        except (TypeError, ValueError) as e:
            msg = f"Invalid API document: {path}"
            raise ApiModelError(
                msg, resource=str(path), operation="load_api_model", cause=e
            ) from e
        logger.info("Loaded package %s from %s", package.display_name, path)
    return model
