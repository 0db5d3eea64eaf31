"""Utility for determining the output file for a page."""

from pathlib import Path

from mintdoc.errors import ErrorCode, ValidationError


def output_file_for_page(out_root: Path, page_path: str) -> Path:
    """Resolve ``page_path`` under ``out_root``, creating its parent directory."""
    # Foo/bar.mdx -> out_root/Foo/bar.mdx
    base = out_root.resolve()
    target = (base / page_path).resolve()
    try:
        target.relative_to(base)
    except ValueError as e:
        msg = f'Page path "{page_path}" is outside the output folder'
        raise ValidationError(
            msg,
            ErrorCode.PATH_TRAVERSAL,
            resource=page_path,
            operation="output_file_for_page",
            data={"out_root": str(base)},
            cause=e,
        ) from e
    target.parent.mkdir(parents=True, exist_ok=True)
    return target
