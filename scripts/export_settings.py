"""Export the environment variable reference for every settings class.

Writes JSON consumed by the deployment docs:

    uv run python scripts/export_settings.py --output docs/env-vars.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Type

from pydantic import SecretStr
from pydantic_core import PydanticUndefined
from pydantic_settings import BaseSettings

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from infrastructure.settings import (  # noqa: E402
    DatabaseSettings,
    DirectoryApiSettings,
    Settings,
    TenancySettings,
)

SETTINGS_CLASSES: list[Type[BaseSettings]] = [
    Settings,
    TenancySettings,
    DatabaseSettings,
    DirectoryApiSettings,
]


def _display_default(default: Any, is_required: bool) -> Any:
    if isinstance(default, SecretStr):
        return None if is_required else "********"
    if is_required or default is None:
        return None
    # Keep JSON-native values as they are
    if isinstance(default, (list, dict, bool, int, float)):
        return default
    return str(default)


def get_model_metadata(settings_class: Type[BaseSettings]) -> dict[str, Any]:
    """Describe one settings class: prefix, docstring and each variable."""
    prefix = settings_class.model_config.get("env_prefix", "")
    properties = []

    for name, field in settings_class.model_fields.items():
        type_name = getattr(field.annotation, "__name__", str(field.annotation))
        default = field.get_default(call_default_factory=True)

        # Secrets defaulting to "" must be provided in production
        is_required = default is PydanticUndefined or (
            isinstance(default, SecretStr) and default.get_secret_value() == ""
        )

        properties.append(
            {
                "env_var": f"{prefix}{name.upper()}",
                "type": "Secret" if "Secret" in type_name else type_name,
                "default": _display_default(default, is_required),
                "required": is_required,
                "description": field.description or "",
            }
        )

    return {
        "class_name": settings_class.__name__,
        "prefix": prefix,
        "doc": settings_class.__doc__ or "",
        "properties": properties,
    }


def export_settings(output_path: Path) -> None:
    data = {cls.__name__: get_model_metadata(cls) for cls in SETTINGS_CLASSES}

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    print(f"Exported settings to {output_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--output",
        type=Path,
        default=root_path / "docs" / "env-vars.json",
        help="Destination JSON file (default: docs/env-vars.json)",
    )
    args = parser.parse_args()
    export_settings(args.output)


if __name__ == "__main__":
    main()
