"""TOML configuration loader for the wellbeing log."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class StorageConfig:
    data_dir: str = "~/.local/share/optimumlog"
    journals_file: str = "journals.json"
    money_file: str = "money.json"
    food_file: str = "food.json"
    dishes_path: str = ""  # empty: bundled catalog

    def path_for(self, filename: str) -> Path:
        return Path(self.data_dir).expanduser() / filename


@dataclass
class RecognitionConfig:
    backend: str = "logmeal"
    base_url: str = "https://api.logmeal.es/v2"
    user_key: str = ""
    token: str = ""
    timeout: float = 5.0


@dataclass
class ImageConfig:
    max_side: int = 1024
    initial_quality: float = 0.7
    quality_step: float = 0.1
    min_quality: float = 0.2
    target_bytes: int = 950_000
    max_bytes: int = 1_048_576


@dataclass
class ChartConfig:
    window_days: int = 7
    zero_fill: bool = False


@dataclass
class MoneyConfig:
    methods: list[str] = field(
        default_factory=lambda: ["WeChat", "Alipay", "Cash", "Card", "Other"]
    )
    default_method: str = "WeChat"


@dataclass
class CameraConfig:
    index: int = 0
    save_dir: str = "/tmp/optimumlog"


@dataclass
class ProfileConfig:
    """User preferences shown on the home screen.

    ``nickname`` is used in greetings, ``wallpaper`` selects one of the
    background palettes (0, 1 or 2).
    """

    nickname: str = "Friend"
    wallpaper: int = 0


@dataclass
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    recognition: RecognitionConfig = field(default_factory=RecognitionConfig)
    image: ImageConfig = field(default_factory=ImageConfig)
    charts: ChartConfig = field(default_factory=ChartConfig)
    money: MoneyConfig = field(default_factory=MoneyConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    LogMeal credentials and the data directory can be overridden via
    environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    sto = raw.get("storage", {})
    rec = raw.get("recognition", {})
    img = raw.get("image", {})
    cht = raw.get("charts", {})
    mon = raw.get("money", {})
    cam = raw.get("camera", {})
    prf = raw.get("profile", {})

    # Resolve secrets: config file → environment variable
    user_key = rec.get("user_key", "") or os.environ.get("LOGMEAL_USER_KEY", "")
    token = rec.get("token", "") or os.environ.get("LOGMEAL_TOKEN", "")

    data_dir = os.environ.get("OPTIMUMLOG_DATA_DIR", "") or sto.get(
        "data_dir", "~/.local/share/optimumlog"
    )

    methods = mon.get("methods", MoneyConfig().methods)

    return AppConfig(
        storage=StorageConfig(
            data_dir=data_dir,
            journals_file=sto.get("journals_file", "journals.json"),
            money_file=sto.get("money_file", "money.json"),
            food_file=sto.get("food_file", "food.json"),
            dishes_path=sto.get("dishes_path", ""),
        ),
        recognition=RecognitionConfig(
            backend=rec.get("backend", "logmeal"),
            base_url=rec.get("base_url", "https://api.logmeal.es/v2"),
            user_key=str(user_key),
            token=token,
            timeout=float(rec.get("timeout", 5.0)),
        ),
        image=ImageConfig(
            max_side=img.get("max_side", 1024),
            initial_quality=img.get("initial_quality", 0.7),
            quality_step=img.get("quality_step", 0.1),
            min_quality=img.get("min_quality", 0.2),
            target_bytes=img.get("target_bytes", 950_000),
            max_bytes=img.get("max_bytes", 1_048_576),
        ),
        charts=ChartConfig(
            window_days=cht.get("window_days", 7),
            zero_fill=cht.get("zero_fill", False),
        ),
        money=MoneyConfig(
            methods=list(methods),
            default_method=mon.get("default_method", methods[0] if methods else "Other"),
        ),
        camera=CameraConfig(
            index=cam.get("index", 0),
            save_dir=cam.get("save_dir", "/tmp/optimumlog"),
        ),
        profile=ProfileConfig(
            nickname=prf.get("nickname", "Friend"),
            wallpaper=prf.get("wallpaper", 0),
        ),
    )
