#!/usr/bin/env python3
# navshell/config/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed NAVSHELL_ (prefix stripped)

Validation:
  - SITE_URL: '' or an http(s) URL
  - SECTIONS: non-empty, comma separated (or a list in JSON/TOML)
  - DYNAMIC_SECTION: '' or one of SECTIONS
  - FETCH_TIMEOUT / TRANSIENT_SECONDS: float > 0
  - OPEN_BROWSER / UNKNOWN_COMMAND_ERROR / SHOW_GIT_BRANCH / SHOW_DATE: bool
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - THEME: 'light' or 'dark'
  - SOCIALS: JSON list of {"name","url","isHidden"} or 'name=url,name=url'
  - ASCII_ARTS: JSON list of {"name","art"}
"""

import configparser
import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from navshell.errors import ConfigError

ENV_PREFIX = "NAVSHELL_"

DEFAULTS: dict[str, Any] = {
    "SITE_URL": "",
    "RECORD_INDEX_PATH": "/api/blogs",
    "SECTIONS": "about-me,projects,blogs,contact-us,gallery,github",
    "DYNAMIC_SECTION": "blogs",
    "FETCH_TIMEOUT": 6.0,
    "OPEN_BROWSER": False,
    "LOG_LEVEL": None,               # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
    "UNKNOWN_COMMAND_ERROR": False,
    "TRANSIENT_SECONDS": 2.0,
    "THEME": "dark",
    # display snapshot
    "USERNAME": "Visitor",
    "PROMPT_SYMBOL": "➜",
    "SHOW_GIT_BRANCH": True,
    "SHOW_DATE": True,
    "RESUME_URL": None,
    "EMAIL": None,
    "SOCIALS": None,
    "ASCII_ARTS": None,
}


# ---------- data model ----------

@dataclass(frozen=True)
class SocialLink:
    name: str
    url: str
    hidden: bool = False


@dataclass(frozen=True)
class AsciiArt:
    name: str
    art: str


@dataclass(frozen=True)
class DisplayConfig:
    """Read-only snapshot of what the shell shows about the site owner."""
    username: str = "Visitor"
    prompt_symbol: str = "➜"
    show_git_branch: bool = True
    show_date: bool = True
    ascii_arts: tuple[AsciiArt, ...] = ()
    resume_url: str | None = None
    email: str | None = None
    socials: tuple[SocialLink, ...] = ()

    def visible_socials(self) -> list[SocialLink]:
        return [s for s in self.socials if not s.hidden]


@dataclass(frozen=True)
class AppConfig:
    site_url: str
    record_index_path: str
    sections: tuple[str, ...]
    dynamic_section: str | None
    fetch_timeout: float
    open_browser: bool
    log_level: str | None
    log_file_path: Path | None
    unknown_command_error: bool
    transient_seconds: float
    theme: str
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser(interpolation=None)
    if not path.exists():
        return {}
    try:
        cfg.read(path, encoding="utf-8")
    except configparser.Error as exc:
        raise ConfigError(f"Invalid INI in {path.name}: {exc}") from exc
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path.name}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path.name}: {exc}") from exc


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested tables to UPPER_SNAKE keys, leaving lists untouched.
    Example: {'log': {'level': 'DEBUG'}} -> {'LOG_LEVEL': 'DEBUG'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(base: Path) -> list[Path]:
    return [
        base / ".env",
        base / "config.ini",
        base / "config.json",
        base / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ConfigError(f"{key} expects a boolean, got: {val!r}")


def _as_positive_float(key: str, val: Any) -> float:
    try:
        number = float(str(val).strip())
    except ValueError as exc:
        raise ConfigError(f"{key} expects a number, got: {val!r}") from exc
    if number <= 0:
        raise ConfigError(f"{key} must be > 0")
    return number


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val).strip()


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ConfigError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


def _as_name_list(key: str, val: Any) -> tuple[str, ...]:
    items = val if isinstance(val, (list, tuple)) else str(val).split(",")
    names = tuple(str(item).strip() for item in items if str(item).strip())
    if not names:
        raise ConfigError(f"{key} must list at least one name")
    lowered = [n.lower() for n in names]
    if len(set(lowered)) != len(lowered):
        raise ConfigError(f"{key} contains duplicate names")
    return names


def _maybe_json(key: str, val: Any) -> Any:
    if isinstance(val, str) and val.strip().startswith(("[", "{")):
        try:
            return json.loads(val)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{key} holds invalid JSON: {exc}") from exc
    return val


def _as_socials(val: Any) -> tuple[SocialLink, ...]:
    if _as_opt_str(val) is None and not isinstance(val, (list, tuple)):
        return ()
    val = _maybe_json("SOCIALS", val)
    links: list[SocialLink] = []
    if isinstance(val, (list, tuple)):
        for item in val:
            if not isinstance(item, Mapping) or not item.get("name") or not item.get("url"):
                raise ConfigError("SOCIALS entries need 'name' and 'url'")
            hidden = item.get("isHidden", item.get("hidden", False))
            links.append(SocialLink(str(item["name"]), str(item["url"]),
                                    _as_bool("SOCIALS.isHidden", hidden)))
        return tuple(links)
    for pair in str(val).split(","):
        if not pair.strip():
            continue
        name, sep, url = pair.partition("=")
        if not sep or not name.strip() or not url.strip():
            raise ConfigError(f"SOCIALS entry must be name=url, got {pair.strip()!r}")
        links.append(SocialLink(name.strip(), url.strip()))
    return tuple(links)


def _as_ascii_arts(val: Any) -> tuple[AsciiArt, ...]:
    if _as_opt_str(val) is None and not isinstance(val, (list, tuple)):
        return ()
    val = _maybe_json("ASCII_ARTS", val)
    if not isinstance(val, (list, tuple)):
        raise ConfigError("ASCII_ARTS must be a list of {name, art}")
    arts: list[AsciiArt] = []
    for item in val:
        if not isinstance(item, Mapping):
            raise ConfigError("ASCII_ARTS entries must be tables/objects")
        art = str(item.get("art") or "")
        if not art.strip():
            continue  # empty rows left over from the editor
        arts.append(AsciiArt(str(item.get("name") or "untitled"), art))
    return tuple(arts)


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _merge_sources(base: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base):
        if file.suffix == ".env" or file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override all; only NAVSHELL_-prefixed keys
    env_overrides = {k[len(ENV_PREFIX):]: v for k, v in environ.items()
                     if k.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", k)}
    merged.update(env_overrides)
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any]) -> AppConfig:
    site_url = (_as_opt_str(config.get("SITE_URL")) or "").rstrip("/")
    if site_url and not re.match(r"^https?://", site_url):
        raise ConfigError(f"SITE_URL must start with http:// or https://, got {site_url!r}")

    sections = _as_name_list("SECTIONS", config.get("SECTIONS", DEFAULTS["SECTIONS"]))
    dynamic = _as_opt_str(config.get("DYNAMIC_SECTION"))
    if dynamic is not None:
        match = [s for s in sections if s.lower() == dynamic.lower()]
        if not match:
            raise ConfigError(f"DYNAMIC_SECTION {dynamic!r} is not one of SECTIONS")
        dynamic = match[0]

    theme = (_as_opt_str(config.get("THEME")) or "dark").lower()
    if theme not in {"light", "dark"}:
        raise ConfigError(f"THEME must be 'light' or 'dark', got {theme!r}")

    display = DisplayConfig(
        username=_as_opt_str(config.get("USERNAME")) or "Visitor",
        prompt_symbol=_as_opt_str(config.get("PROMPT_SYMBOL")) or "➜",
        show_git_branch=_as_bool("SHOW_GIT_BRANCH", config.get("SHOW_GIT_BRANCH", True)),
        show_date=_as_bool("SHOW_DATE", config.get("SHOW_DATE", True)),
        ascii_arts=_as_ascii_arts(config.get("ASCII_ARTS")),
        resume_url=_as_opt_str(config.get("RESUME_URL")),
        email=_as_opt_str(config.get("EMAIL")),
        socials=_as_socials(config.get("SOCIALS")),
    )

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return AppConfig(
        site_url=site_url,
        record_index_path=_as_opt_str(config.get("RECORD_INDEX_PATH")) or "/api/blogs",
        sections=sections,
        dynamic_section=dynamic,
        fetch_timeout=_as_positive_float("FETCH_TIMEOUT", config.get("FETCH_TIMEOUT", 6.0)),
        open_browser=_as_bool("OPEN_BROWSER", config.get("OPEN_BROWSER", False)),
        log_level=_as_log_level(config.get("LOG_LEVEL")),
        log_file_path=_as_opt_path(config.get("LOG_FILE_PATH")),
        unknown_command_error=_as_bool(
            "UNKNOWN_COMMAND_ERROR", config.get("UNKNOWN_COMMAND_ERROR", False)),
        transient_seconds=_as_positive_float(
            "TRANSIENT_SECONDS", config.get("TRANSIENT_SECONDS", 2.0)),
        theme=theme,
        display=display,
        extra=extra,
    )


# ---------- public API ----------

def build_config(overrides: Mapping[str, Any] | None = None) -> AppConfig:
    """Validate defaults plus `overrides` (keys as in DEFAULTS) without touching disk."""
    raw: dict[str, Any] = dict(DEFAULTS)
    raw.update(_normalize_keys(overrides or {}))
    return _validate_and_build(raw)


def load_config(base: Path | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects.
    """
    raw = _merge_sources(base or Path.cwd(), os.environ if environ is None else environ)
    return _validate_and_build(raw)
