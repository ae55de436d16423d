"""Project configuration stored in ``forge.yaml``.

Only the ``compiler`` section is read; other sections belong to the
pipeline stages around the compiler and are left alone.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from cluster_forge.compiler.errors import ForgeError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "forge.yaml"
TEMPLATE_ROOT_ENV = "CLUSTER_FORGE_TEMPLATE_ROOT"

_PATH_KEYS = ("working_dir", "output_dir", "packages_dir", "template_dir")


class ForgeConfigError(ForgeError):
    """Raised when forge.yaml cannot be parsed or validated."""


@dataclass(frozen=True)
class ForgeConfig:
    """Resolved compiler locations.

    Attributes:
        root: Project root every relative path is resolved against.
        working_dir: Holds one ``<name>/`` directory of split manifests per stack.
        output_dir: Receives the classified ``<name>-{object,crd,secret}.yaml``.
        packages_dir: Receives the aggregate ``<name>-packages.yaml``.
        template_dir: Substitute envelope templates; ``None`` uses the bundled set.
    """

    root: Path
    working_dir: Path
    output_dir: Path
    packages_dir: Path
    template_dir: Path | None = None

    @classmethod
    def defaults(cls, root: Path) -> "ForgeConfig":
        return cls(
            root=root,
            working_dir=root / "working",
            output_dir=root / "output",
            packages_dir=root / "packages",
        )

    def manifest_dir(self, package_name: str) -> Path:
        return self.working_dir / package_name

    def ensure_output_dirs(self) -> None:
        """Create the output and packages directories if needed."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.packages_dir.mkdir(parents=True, exist_ok=True)


def _resolve(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else root / path


def load_forge_config(root: Path) -> ForgeConfig:
    """Load ``<root>/forge.yaml``, falling back to defaults when absent.

    ``CLUSTER_FORGE_TEMPLATE_ROOT`` overrides ``compiler.template_dir``.
    """
    config = ForgeConfig.defaults(root)
    config_file = root / CONFIG_FILENAME
    values: dict[str, Path | None] = {}

    if config_file.exists():
        yaml = YAML(typ="safe")
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.load(f) or {}
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read config: %s", exc)
            raise ForgeConfigError(f"Cannot read {config_file}: {exc}") from exc
        except YAMLError as exc:
            logger.error("Failed to load config: %s", exc)
            raise ForgeConfigError(f"Invalid YAML in {config_file}: {exc}") from exc

        if not isinstance(data, dict):
            raise ForgeConfigError(f"Invalid {CONFIG_FILENAME}: expected a mapping at the top level")

        compiler = data.get("compiler") or {}
        if not isinstance(compiler, dict):
            raise ForgeConfigError(f"Invalid compiler section in {CONFIG_FILENAME}: expected a mapping")

        unknown = sorted(set(compiler) - set(_PATH_KEYS))
        if unknown:
            logger.warning("Ignoring unknown compiler keys in %s: %s", config_file, ", ".join(unknown))

        for key in _PATH_KEYS:
            if key not in compiler or compiler[key] is None:
                continue
            value = compiler[key]
            if not isinstance(value, str) or not value.strip():
                raise ForgeConfigError(
                    f"Invalid compiler.{key} in {CONFIG_FILENAME}: expected a non-empty path string"
                )
            values[key] = _resolve(root, value.strip())
    else:
        logger.debug("No %s in %s; using defaults", CONFIG_FILENAME, root)

    if env_root := os.environ.get(TEMPLATE_ROOT_ENV):
        values["template_dir"] = _resolve(root, env_root)

    return ForgeConfig(
        root=root,
        working_dir=values.get("working_dir") or config.working_dir,
        output_dir=values.get("output_dir") or config.output_dir,
        packages_dir=values.get("packages_dir") or config.packages_dir,
        template_dir=values.get("template_dir"),
    )


__all__ = [
    "CONFIG_FILENAME",
    "TEMPLATE_ROOT_ENV",
    "ForgeConfig",
    "ForgeConfigError",
    "load_forge_config",
]
