"""
Common utility functions for rircheck
"""

import re
import json
import yaml
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = "config/rircheck.yaml"


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file with environment variable expansion"""
    try:
        # .env from the working directory; never overrides variables already set
        load_dotenv()

        def _resolve_config_path(path: str) -> str:
            p = Path(path).expanduser()
            if p.exists():
                return str(p)

            # Outside the repo the default path won't exist; try the `rircheck init` location
            if path == DEFAULT_CONFIG_PATH:
                home_cfg = Path.home() / ".rircheck" / "rircheck.yaml"
                if home_cfg.exists():
                    return str(home_cfg)
                if Path("rircheck.yaml").exists():
                    return "rircheck.yaml"

            return str(p)

        resolved_config_path = _resolve_config_path(config_path)

        env_candidate = Path(resolved_config_path).expanduser().parent / ".env"
        if env_candidate.exists():
            load_dotenv(env_candidate)

        def _expand_env_vars(value: Any) -> Any:
            """Recursively expand environment variables in config values"""
            if isinstance(value, str):
                # Match ${VAR_NAME:-default_value} or ${VAR_NAME}
                pattern = r'\$\{([^:}]+)(?::-(.*?))?\}'

                def replacer(match):
                    var_name = match.group(1)
                    default_value = match.group(2) if match.group(2) is not None else ""
                    return os.getenv(var_name, default_value)

                return re.sub(pattern, replacer, value)
            elif isinstance(value, dict):
                return {k: _expand_env_vars(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [_expand_env_vars(item) for item in value]
            else:
                return value

        with open(resolved_config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        return _expand_env_vars(config)
    except Exception as e:
        print(f"Warning: Could not load config from {config_path}: {e}")
        return {}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge `override` into a copy of `base`, recursing into nested dicts"""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def save_json(data: Any, filepath: Path):
    """Save data as JSON"""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2, default=str)


def parse_params(pairs: Optional[List[str]]) -> List[Tuple[str, str]]:
    """Turn ["resource=3333", "prefix=1.1.1.0/24"] into ordered (key, value) pairs"""
    params = []
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"expected key=value, got {pair!r}")
        params.append((key.strip(), value.strip()))
    return params


def yes_no(value: Any) -> str:
    """Render a tri-state flag for tables"""
    if value is None:
        return "-"
    return "yes" if value else "no"
