from __future__ import annotations

import pytest

from shipwright.test.architecture._gate import require_arch_checks_enabled
from shipwright.test.architecture._utils import (
    iter_source_files,
    matches_prefix,
    parse_imports,
    relative_name,
)

# Each layer may import only from the layers listed before it.
LAYERS = ("core", "platform", "output", "git", "release", "cli")

# output/errors.py renders release failures and may import their types.
EXCEPTIONS = {
    ("output/errors.py", "shipwright.release.errors"),
    ("output/errors.py", "shipwright.release.model"),
}


def _layer_of(rel: str) -> str | None:
    top = rel.split("/", 1)[0]
    return top if top in LAYERS else None


@pytest.mark.parametrize("layer", LAYERS)
def test_layer_imports_only_lower_layers(layer: str) -> None:
    require_arch_checks_enabled()

    forbidden = LAYERS[LAYERS.index(layer) + 1 :]
    offenders: list[str] = []
    for path in iter_source_files():
        rel = relative_name(path)
        if _layer_of(rel) != layer:
            continue
        for item in parse_imports(path):
            if (rel, item.module) in EXCEPTIONS:
                continue
            for higher in forbidden:
                if matches_prefix(item.module, f"shipwright.{higher}"):
                    offenders.append(f"{rel}:{item.line}: imports {item.module}")

    assert not offenders, f"Layering violations in {layer}:\n" + "\n".join(offenders)


def test_release_layer_never_imports_typer() -> None:
    require_arch_checks_enabled()

    offenders = [
        f"{relative_name(path)}:{item.line}"
        for path in iter_source_files()
        if _layer_of(relative_name(path)) in {"core", "platform", "output", "git", "release"}
        for item in parse_imports(path)
        if matches_prefix(item.module, "typer")
    ]

    assert not offenders, "typer imported outside the cli layer:\n" + "\n".join(offenders)
