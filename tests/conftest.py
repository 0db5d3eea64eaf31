"""Shared fixtures: a small API model resembling one extracted package."""

import json
from pathlib import Path
from typing import Any

import pytest

from mintdoc.api_item import ApiItem, ExcerptToken, Parameter
from mintdoc.api_item_kind import ApiItemKind
from mintdoc.api_model import ApiModel
from mintdoc.declaration_reference import DeclarationReference
from mintdoc.doc_comment import parse_doc_comment

PACKAGE = "@acme/widgets"


def ref(text: str) -> DeclarationReference:
    """Parse a declaration reference."""
    return DeclarationReference.parse(text)


def build_sample_model() -> ApiModel:
    """Build Model > @acme/widgets > EntryPoint > declarations."""
    widget_ref = ref(f"{PACKAGE}!Widget:class")
    widget = ApiItem(
        kind=ApiItemKind.CLASS,
        display_name="Widget",
        canonical_reference=widget_ref,
        doc=parse_doc_comment(
            "/**\n * A widget. Pair it with {@link Gadget}.\n *\n"
            " * @remarks Widgets are cheap; see {@link Gadget}.\n */"
        ),
        excerpt_tokens=[ExcerptToken("Content", "export declare class Widget ")],
        members=[
            ApiItem(
                kind=ApiItemKind.CONSTRUCTOR,
                display_name="(constructor)",
                parameters=[Parameter("name", (ExcerptToken("Content", "string"),))],
                excerpt_tokens=[ExcerptToken("Content", "constructor(name: string);")],
            ),
            ApiItem(
                kind=ApiItemKind.PROPERTY,
                display_name="name",
                is_readonly=True,
                type_tokens=[ExcerptToken("Content", "string")],
                excerpt_tokens=[ExcerptToken("Content", "readonly name: string;")],
            ),
            ApiItem(
                kind=ApiItemKind.METHOD,
                display_name="render",
                overload_index=1,
                excerpt_tokens=[ExcerptToken("Content", "render(): string;")],
                type_tokens=[ExcerptToken("Content", "string")],
            ),
            ApiItem(
                kind=ApiItemKind.METHOD,
                display_name="render",
                overload_index=2,
                parameters=[Parameter("target", (ExcerptToken("Content", "Element"),))],
                excerpt_tokens=[ExcerptToken("Content", "render(target: Element): void;")],
                type_tokens=[ExcerptToken("Content", "void")],
            ),
        ],
    )
    gadget = ApiItem(
        kind=ApiItemKind.INTERFACE,
        display_name="Gadget",
        canonical_reference=ref(f"{PACKAGE}!Gadget:interface"),
        doc=parse_doc_comment("/** Something a widget can hold. */"),
        members=[
            ApiItem(
                kind=ApiItemKind.PROPERTY,
                display_name="id",
                type_tokens=[ExcerptToken("Content", "number")],
            )
        ],
    )
    create = ApiItem(
        kind=ApiItemKind.FUNCTION,
        display_name="createWidget",
        doc=parse_doc_comment(
            "/**\n * Creates a widget.\n * @param name - The widget name.\n"
            " * @returns The new widget.\n */"
        ),
        parameters=[Parameter("name", (ExcerptToken("Content", "string"),))],
        type_tokens=[ExcerptToken("Reference", "Widget", widget_ref)],
        excerpt_tokens=[
            ExcerptToken("Content", "export declare function createWidget(name: string): "),
            ExcerptToken("Reference", "Widget", widget_ref),
            ExcerptToken("Content", ";"),
        ],
    )
    color = ApiItem(
        kind=ApiItemKind.ENUM,
        display_name="Color",
        members=[
            ApiItem(kind=ApiItemKind.ENUM_MEMBER, display_name="Red", initializer='"red"'),
            ApiItem(kind=ApiItemKind.ENUM_MEMBER, display_name="Green", initializer='"green"'),
        ],
    )
    util = ApiItem(
        kind=ApiItemKind.NAMESPACE,
        display_name="util",
        members=[ApiItem(kind=ApiItemKind.FUNCTION, display_name="helper")],
    )
    entry = ApiItem(
        kind=ApiItemKind.ENTRY_POINT,
        display_name="",
        members=[widget, gadget, create, color, util],
    )
    package = ApiItem(kind=ApiItemKind.PACKAGE, display_name=PACKAGE, members=[entry])
    model = ApiModel()
    model.add_package(package)
    return model


@pytest.fixture
def sample_model() -> ApiModel:
    """Provide a fresh sample model."""
    return build_sample_model()


def find(model: ApiModel, *names: str) -> ApiItem:
    """Walk display names from the package down, looking through entry points."""
    current = model.packages[0]
    for name in names:
        current = current.find_members_by_name(name)[0]
    return current


@pytest.fixture
def api_json_doc() -> dict[str, Any]:
    """Provide a raw ``*.api.json`` package document."""
    return {
        "kind": "Package",
        "canonicalReference": "@acme/tools!",
        "docComment": "/**\n * Tools package.\n *\n * @packageDocumentation\n */\n",
        "name": "@acme/tools",
        "members": [
            {
                "kind": "EntryPoint",
                "canonicalReference": "@acme/tools!",
                "name": "",
                "members": [
                    {
                        "kind": "Class",
                        "canonicalReference": "@acme/tools!Hammer:class",
                        "docComment": "/**\n * A hammer.\n */\n",
                        "excerptTokens": [
                            {"kind": "Content", "text": "export declare class Hammer "}
                        ],
                        "releaseTag": "Public",
                        "name": "Hammer",
                        "members": [
                            {
                                "kind": "Constructor",
                                "canonicalReference": "@acme/tools!Hammer:constructor(1)",
                                "excerptTokens": [
                                    {"kind": "Content", "text": "constructor(weight: "},
                                    {"kind": "Content", "text": "number"},
                                    {"kind": "Content", "text": ");"},
                                ],
                                "overloadIndex": 1,
                                "parameters": [
                                    {
                                        "parameterName": "weight",
                                        "parameterTypeTokenRange": {
                                            "startIndex": 1,
                                            "endIndex": 2,
                                        },
                                        "isOptional": False,
                                    }
                                ],
                            },
                            {
                                "kind": "Method",
                                "canonicalReference": "@acme/tools!Hammer#strike:member(1)",
                                "excerptTokens": [
                                    {"kind": "Content", "text": "strike(): "},
                                    {
                                        "kind": "Reference",
                                        "text": "Nail",
                                        "canonicalReference": "@acme/tools!Nail:interface",
                                    },
                                    {"kind": "Content", "text": ";"},
                                ],
                                "isStatic": False,
                                "returnTypeTokenRange": {"startIndex": 1, "endIndex": 2},
                                "overloadIndex": 1,
                                "parameters": [],
                                "name": "strike",
                            },
                            {"kind": "Accessor", "name": "unsupported"},
                        ],
                    },
                    {
                        "kind": "Interface",
                        "canonicalReference": "@acme/tools!Nail:interface",
                        "name": "Nail",
                        "members": [],
                    },
                ],
            }
        ],
    }


@pytest.fixture
def api_json_file(tmp_path: Path, api_json_doc: dict[str, Any]) -> Path:
    """Write the raw package document to ``tools.api.json``."""
    path = tmp_path / "input" / "tools.api.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(api_json_doc), encoding="utf-8")
    return path
