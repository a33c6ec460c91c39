# c4engine/config.py
import logging
import os
import tomllib
from dataclasses import dataclass, field
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Window weights indexed by the number of same-colored stones (0..3)
WINDOW_WEIGHTS = (0, 1, 10, 50)


@dataclass
class SearchConfig:
    strategy: str = "alpha_beta"
    depth: int = 6  # plies, used by minimax and alpha_beta
    iterations: int = 20000  # used by mcts
    ucb_win_scale: float = 2.0  # UCB1 divides mean credit by this; a win credits 2, a draw 1
    seed: Optional[int] = None  # None means an unseeded rollout source
    show_progress: bool = False


@dataclass
class EvalConfig:
    window_weights: Tuple[int, ...] = field(default_factory=lambda: WINDOW_WEIGHTS)
    win_score: int = 512
    tempo_bonus: int = 16  # small edge for the side that moves next


@dataclass
class UIConfig:
    engine_name: str = "C4Engine"
    human_color: Optional[str] = "O"  # "O", "X" or None for engine vs engine
    render_indent: int = 0


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
                else:
                    logger.warning("Ignoring unknown config key [%s] %s", section, k)
        if isinstance(cfg.eval.window_weights, list):
            cfg.eval.window_weights = tuple(cfg.eval.window_weights)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        cfg.validate()
        return cfg

    def validate(self):
        """
        Raise ValueError when a loaded value cannot drive the engine.
        Strategy names are checked by core.strategy.get_strategy, which owns the registry.
        """
        if self.search.depth < 0 or self.search.iterations < 0:
            raise ValueError("Search depth and iterations must be non-negative")
        if len(self.eval.window_weights) != 4:
            raise ValueError("window_weights needs exactly 4 entries (0..3 stones)")
        if self.search.ucb_win_scale <= 0:
            raise ValueError("ucb_win_scale must be positive")


def apply_env_overrides(cfg: Config, environ=None) -> Config:
    """Apply C4_* environment overrides for quick debugging."""
    environ = os.environ if environ is None else environ
    override_depth = environ.get("C4_SEARCH_DEPTH")
    if override_depth:
        cfg.search.depth = int(override_depth)
    override_iterations = environ.get("C4_SEARCH_ITERATIONS")
    if override_iterations:
        cfg.search.iterations = int(override_iterations)
    override_strategy = environ.get("C4_STRATEGY")
    if override_strategy:
        cfg.search.strategy = override_strategy
    cfg.validate()
    return cfg


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=getattr(logging, (level or CONFIG.log_level).upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


# single globally importable config instance
CONFIG = apply_env_overrides(
    Config.load_from_toml(os.environ.get("C4_CONFIG_TOML", "config.toml"))
)
