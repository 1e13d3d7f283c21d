# objlit/config.py
from pathlib import Path
from typing import Any, Dict
import argparse
import logging
import os
import importlib.resources as ir
import tomllib

from .errors import ConfigError

# Exposed for debugging: where the *project-local* config was loaded from (or None)
LAST_CONFIG_PATH: Path | None = None

_log = logging.getLogger("objlit.config")

_NAME_POLICIES = ("short", "qualified")


# ---------- File discovery helpers ----------


def _first_existing(paths: list[Path]) -> Path | None:
    for p in paths:
        if p.is_file():
            return p
    return None


def _candidates(base: Path) -> list[Path]:
    return [base / "config.toml", base / "config.yaml", base / "config.yml"]


def _find_project_config(start: Path) -> Path | None:
    """
    Return the nearest '.objlit/config.{toml,yaml,yml}' walking upward from 'start'.
    """
    cur = start.resolve()
    for p in [cur, *cur.parents]:
        cand = _first_existing(_candidates(p / ".objlit"))
        if cand:
            _log.info("project config: %s", cand)
            return cand
    return None


def _find_user_config() -> Path | None:
    """
    Return the user-level config in precedence order:
      1) $OBJLIT_CONFIG            (exact path)
      2) $XDG_CONFIG_HOME/objlit/config.{toml,yaml,yml}
      3) ~/.config/objlit/config.{toml,yaml,yml}
      4) ~/.objlit/config.{toml,yaml,yml}
    """
    env_path = os.getenv("OBJLIT_CONFIG")
    if env_path:
        env_cand = Path(env_path).expanduser()
        if env_cand.is_file():
            _log.info("user config via OBJLIT_CONFIG=%s", env_cand)
            return env_cand

    xdg_home = os.getenv("XDG_CONFIG_HOME")
    if xdg_home:
        cand = _first_existing(_candidates(Path(xdg_home) / "objlit"))
        if cand:
            _log.info("user config via XDG: %s", cand)
            return cand

    for base in (Path.home() / ".config" / "objlit", Path.home() / ".objlit"):
        cand = _first_existing(_candidates(base))
        if cand:
            _log.info("user config: %s", cand)
            return cand

    return None


# ---------- Parsers ----------


def _load_toml_text(txt: str) -> Dict[str, Any]:
    try:
        return tomllib.loads(txt)
    except tomllib.TOMLDecodeError as exc:
        _log.warning("Failed to parse TOML: %s", exc)
        return {}


def _load_yaml_text(txt: str) -> Dict[str, Any]:
    import yaml  # PyYAML

    try:
        data = yaml.safe_load(txt) or {}
    except yaml.YAMLError as exc:
        _log.warning("Failed to parse YAML: %s", exc)
        return {}
    if not isinstance(data, dict):
        _log.warning("YAML config root is not a mapping; ignoring.")
        return {}
    return data


def _parse_config_file(path: Path) -> Dict[str, Any]:
    txt = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        return _load_toml_text(txt) or {}
    if suffix in (".yaml", ".yml"):
        return _load_yaml_text(txt) or {}
    _log.warning("Unknown config extension '%s' for %s; ignoring.", suffix, path)
    return {}


# ---------- Merging & coercion ----------


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge two dicts: values in 'b' override 'a'; nested dicts are merged recursively.
    """
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _coerce_types(d: Dict[str, Any]) -> Dict[str, Any]:
    """
    Coerce known fields so downstream code gets stable types.
      - Paths: output
      - Ints:  indent
      - Bools: header
      - Strs:  header_text, builder_suffix, names (validated)
      - additional_sys_path: list[str]
    """
    out = dict(d)

    if "output" in out and isinstance(out["output"], str):
        out["output"] = Path(out["output"]).expanduser()

    if "indent" in out and out["indent"] is not None:
        try:
            out["indent"] = int(out["indent"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"'indent' must be an integer, got {out['indent']!r}") from exc
        if out["indent"] < 0:
            raise ConfigError("'indent' must be >= 0")

    if "header" in out and isinstance(out["header"], str):
        out["header"] = out["header"].strip().lower() in ("1", "true", "yes", "on")

    for k in ("header_text", "builder_suffix"):
        if k in out and out[k] is not None:
            out[k] = str(out[k])

    if "names" in out and out["names"] is not None:
        out["names"] = str(out["names"]).lower()
        if out["names"] not in _NAME_POLICIES:
            raise ConfigError(
                f"'names' must be one of {', '.join(_NAME_POLICIES)}, got {out['names']!r}"
            )

    if "additional_sys_path" in out and out["additional_sys_path"] is not None:
        v = out["additional_sys_path"]
        if isinstance(v, (str, Path)):
            out["additional_sys_path"] = [str(v)]
        else:
            out["additional_sys_path"] = [str(x) for x in v]

    return out


def _effective(cmd: str, raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Compute the effective section for a command by merging:
      effective = deep_merge(raw['defaults'] or {}, raw[cmd] or {})
    then coercing types.
    """
    eff = _deep_merge(raw.get("defaults", {}) or {}, raw.get(cmd, {}) or {})
    eff = _coerce_types(eff)
    _log.info("Effective config for [%s]: %s", cmd, eff if eff else "{}")
    return eff


def _is_emptyish(v: Any) -> bool:
    """Treat None, '' and empty list/dict as 'absent' for config fill."""
    if v is None:
        return True
    if isinstance(v, (list, dict, str)) and len(v) == 0:
        return True
    return False


# ---------- Loader (layering: embedded < user < project) ----------


def _packaged_defaults_text() -> str | None:
    """
    Read objlit/default_config.toml. 'objlit' is a namespace package, so
    importlib.resources may not resolve it (editable installs); the file next
    to this module is read instead.
    """
    try:
        return ir.files("objlit").joinpath("default_config.toml").read_text(encoding="utf-8")
    except Exception as exc:
        _log.info("Packaged defaults not readable via importlib.resources: %s", exc)
    try:
        return Path(__file__).with_name("default_config.toml").read_text(encoding="utf-8")
    except OSError as exc:
        _log.info("No packaged defaults available: %s", exc)
        return None


def _load_default_config(start: Path | None = None) -> Dict[str, Any]:
    """
    Layered load:
      base = packaged defaults (objlit/default_config.toml)
      base <- deep-merge user-level config (if any)
      base <- deep-merge nearest project config (if any)

    Returns a single dict that still contains all sections (e.g., 'defaults', 'render').
    """
    global LAST_CONFIG_PATH

    base: Dict[str, Any] = {}
    txt = _packaged_defaults_text()
    if txt is not None:
        base = _load_toml_text(txt) or {}

    user_cfg_path = _find_user_config()
    if user_cfg_path:
        base = _deep_merge(base, _parse_config_file(user_cfg_path))

    proj_cfg_path = _find_project_config((start or Path.cwd()).resolve())
    if proj_cfg_path:
        base = _deep_merge(base, _parse_config_file(proj_cfg_path))
        LAST_CONFIG_PATH = proj_cfg_path
    else:
        LAST_CONFIG_PATH = None

    return base


# ---------- Public helpers used by CLI code ----------


def apply_config_from_default_file(
    cmd: str, args: argparse.Namespace, start: Path | None = None
) -> None:
    """
    Fill argparse fields that were NOT provided on the CLI (or are 'emptyish')
    using the layered config.
    """
    raw = _load_default_config(start)
    if not raw:
        _log.info("No config loaded (no file found).")
        return

    eff = _effective(cmd, raw)
    box = vars(args)
    for k, v in eff.items():
        if k not in box or _is_emptyish(box[k]):
            box[k] = v
            _log.info("  -> filled '%s' from config: %r", k, v)


def get_effective_config(cmd: str, start: Path | None = None) -> Dict[str, Any]:
    """
    Return the effective config dict for a given section (e.g. "render"),
    i.e. merge [defaults] -> [cmd] from the layered configuration, then coerce
    types. Does not mutate argparse args.
    """
    raw = _load_default_config(start)
    if not raw:
        _log.info("get_effective_config(%s): no config file found.", cmd)
        return {}
    return _effective(cmd, raw)


def generator_from_config(eff: Dict[str, Any]):
    """Build a LiteralGenerator from an effective config section."""
    from .generator import LiteralGenerator, RenderPolicy
    from .normalize import qualified_name, short_name

    names = eff.get("names") or "short"
    policy = RenderPolicy(short_name=qualified_name if names == "qualified" else short_name)
    kwargs: Dict[str, Any] = {}
    if eff.get("builder_suffix"):
        kwargs["builder_suffix"] = eff["builder_suffix"]
    if eff.get("indent") is not None:
        kwargs["indent"] = " " * eff["indent"]
    return LiteralGenerator(policy, **kwargs)
