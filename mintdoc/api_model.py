"""The API-model provider: owns the item tree and resolves references."""

from mintdoc.api_item import ApiItem
from mintdoc.api_item_kind import ApiItemKind
from mintdoc.declaration_reference import DeclarationReference
from mintdoc.resolution_result import ResolveResult


class ApiModel:
    """Holds the root ``Model`` item for one run."""

    def __init__(self, root: ApiItem | None = None) -> None:
        """Initialize the provider with an existing root or an empty model."""
        self.root = root or ApiItem(kind=ApiItemKind.MODEL, display_name="")
        self._packages: dict[str, ApiItem] = {
            p.display_name: p
            for p in self.root.members
            if p.kind == ApiItemKind.PACKAGE
        }

    def add_package(self, package: ApiItem) -> None:
        """Attach a loaded package to the model."""
        if package.display_name in self._packages:
            msg = f"Duplicate package: {package.display_name}"
            raise ValueError(msg)
        self.root.add_member(package)
        self._packages[package.display_name] = package

    @property
    def packages(self) -> list[ApiItem]:
        """Loaded packages in load order."""
        return list(self._packages.values())

    def resolve_declaration_reference(
        self,
        reference: DeclarationReference,
        context: ApiItem | None = None,
    ) -> ResolveResult:
        """Resolve ``reference`` against the model.

        A reference without a package name resolves inside the package of
        ``context``. The model itself is never modified.
        """
        if reference.package_name:
            package = self._packages.get(reference.package_name)
            if package is None:
                return ResolveResult(
                    error_message=f'The package "{reference.package_name}" could not be located'
                )
        else:
            package = context.package if context is not None else None
            if package is None:
                return ResolveResult(
                    error_message="A package name must be specified when no context item is given"
                )

        current = package
        for i, name in enumerate(reference.member_names):
            candidates = current.find_members_by_name(name)
            if not candidates:
                return ResolveResult(
                    error_message=f'The member "{name}" was not found in "{current.display_name}"'
                )
            is_last = i == len(reference.member_names) - 1
            if is_last and reference.overload_index is not None:
                candidates = [
                    c for c in candidates if c.overload_index == reference.overload_index
                ]
                if not candidates:
                    return ResolveResult(
                        error_message=(
                            f'Overload {reference.overload_index} of "{name}" does not exist'
                        )
                    )
            if len(candidates) > 1 and not is_last:
                return ResolveResult(
                    error_message=f'The member reference "{name}" was ambiguous'
                )
            current = candidates[0]
        return ResolveResult(resolved_item=current)
