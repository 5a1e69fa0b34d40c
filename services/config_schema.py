"""Configuration schema definition and validation."""

CONFIG_SCHEMA = {
    "convert": {
        "images": {"type": "bool", "default": True, "label": "Render images"},
        "links": {"type": "bool", "default": True, "label": "Render links"},
        "exclude_hidden": {"type": "bool", "default": True, "label": "Skip elements outside the rendered page"},
        "exclude": {"type": "list", "default": [], "label": "CSS selectors to skip (comma separated)"},
        "base_url": {"type": "str", "default": "", "label": "Base URL for relative src/href"},
    },
    "loader": {
        "timeout_s": {"type": "int", "default": 30, "min": 1, "max": 600, "label": "HTTP timeout (seconds)"},
        "max_retries": {"type": "int", "default": 3, "min": 1, "max": 10, "label": "HTTP attempts"},
        "user_agent": {"type": "str", "default": "deba/0.3", "label": "User-Agent"},
        "parser": {"type": "select", "default": "html.parser", "options": ["html.parser", "lxml", "html5lib"], "label": "HTML parser"},
        "render_wait_ms": {"type": "int", "default": 0, "min": 0, "max": 60000, "label": "Extra wait after load when rendering (ms)"},
    },
    "logging": {
        "level": {"type": "select", "default": "WARNING", "options": ["DEBUG", "INFO", "WARNING", "ERROR"], "label": "Log level"},
    },
}

ENV_KEY_MAP = {
    "DEBA_IMAGES": ("convert", "images"),
    "DEBA_LINKS": ("convert", "links"),
    "DEBA_EXCLUDE_HIDDEN": ("convert", "exclude_hidden"),
    "DEBA_EXCLUDE": ("convert", "exclude"),
    "DEBA_BASE_URL": ("convert", "base_url"),
    "DEBA_HTTP_TIMEOUT": ("loader", "timeout_s"),
    "DEBA_HTTP_MAX_RETRIES": ("loader", "max_retries"),
    "DEBA_USER_AGENT": ("loader", "user_agent"),
    "DEBA_PARSER": ("loader", "parser"),
    "DEBA_RENDER_WAIT_MS": ("loader", "render_wait_ms"),
    "DEBA_LOG_LEVEL": ("logging", "level"),
}


def build_defaults():
    """Build the full default configuration from the schema."""
    defaults = {}
    for category, fields in CONFIG_SCHEMA.items():
        defaults[category] = {}
        for key, spec in fields.items():
            default = spec["default"]
            defaults[category][key] = list(default) if isinstance(default, list) else default
    return defaults


def _clamp(v, spec):
    if "min" in spec:
        v = max(spec["min"], v)
    if "max" in spec:
        v = min(spec["max"], v)
    return v


def coerce_value(value, spec):
    """Convert an input value to the type the schema declares."""
    field_type = spec["type"]
    if value is None or value == "":
        default = spec["default"]
        return list(default) if isinstance(default, list) else default

    if field_type == "bool":
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("true", "1", "yes", "on")

    if field_type == "int":
        try:
            return _clamp(int(value), spec)
        except (ValueError, TypeError):
            return spec["default"]

    if field_type == "float":
        try:
            return _clamp(float(value), spec)
        except (ValueError, TypeError):
            return spec["default"]

    if field_type == "select":
        s = str(value).strip()
        if s.upper() in spec.get("options", []):
            return s.upper()
        if s in spec.get("options", []):
            return s
        return spec["default"]

    if field_type == "list":
        if isinstance(value, str):
            value = value.split(",")
        return [str(v).strip() for v in value if str(v).strip()]

    return str(value)


def validate_and_coerce(data):
    """Validate config data and return a fully populated, typed copy."""
    result = build_defaults()
    if not isinstance(data, dict):
        return result

    for category, fields in CONFIG_SCHEMA.items():
        cat_data = data.get(category, {})
        if not isinstance(cat_data, dict):
            continue
        for key, spec in fields.items():
            if key in cat_data:
                result[category][key] = coerce_value(cat_data[key], spec)

    return result


def from_env(environ):
    """Collect schema values from environment-style key/value pairs."""
    patch = {}
    for env_key, (category, key) in ENV_KEY_MAP.items():
        value = environ.get(env_key)
        if value is None:
            continue
        patch.setdefault(category, {})[key] = value
    return validate_and_coerce(patch)
