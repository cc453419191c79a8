"""Host configuration loaded with OmegaConf."""

from pathlib import Path
from typing import Optional, Sequence

from omegaconf import DictConfig, OmegaConf

from vipax.state import Quirks

DEFAULT_CONFIG_PATH = Path(__file__).parent / "conf" / "config.yaml"


def load_config(
    overrides: Optional[Sequence[str]] = None,
    config_path: Optional[str] = None,
    from_cli: bool = False,
) -> DictConfig:
    """Load the YAML config and merge `key=value` overrides on top.

    Args:
        overrides: Dotlist overrides such as ``["scale=8", "quirks.jump_uses_vx=true"]``
        config_path: Alternative YAML file; defaults to the packaged config
        from_cli: Also merge overrides taken from ``sys.argv``

    Returns:
        The merged configuration
    """
    cfg = OmegaConf.load(config_path or DEFAULT_CONFIG_PATH)
    layers = [cfg]
    if overrides:
        layers.append(OmegaConf.from_dotlist(list(overrides)))
    if from_cli:
        layers.append(OmegaConf.from_cli())
    cfg = OmegaConf.merge(*layers)

    if cfg.instructions_per_frame < 1:
        raise ValueError(f"instructions_per_frame must be positive, got {cfg.instructions_per_frame}")
    if cfg.scale < 1:
        raise ValueError(f"scale must be positive, got {cfg.scale}")
    return cfg


def quirks_from_config(cfg: DictConfig) -> Quirks:
    """Build the instruction quirks from the ``quirks`` section."""
    quirks = OmegaConf.to_container(cfg.get("quirks", {}), resolve=True)
    unknown = set(quirks) - set(Quirks.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown quirks: {sorted(unknown)}")
    return Quirks(**{name: bool(value) for name, value in quirks.items()})
