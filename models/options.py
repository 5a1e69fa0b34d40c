"""Conversion options."""

from dataclasses import dataclass, field

from services.config_schema import CONFIG_SCHEMA, coerce_value

_ALIASES = {
    "excludeHidden": "exclude_hidden",
    "baseUrl": "base_url",
}


@dataclass(frozen=True)
class ConvertOptions:
    images: bool = True
    links: bool = True
    exclude_hidden: bool = True
    exclude: tuple[str, ...] = field(default_factory=tuple)
    base_url: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "ConvertOptions":
        """Build options from a plain dict; unknown keys are ignored.

        Values go through the same coercion as configuration files, so
        ``{"links": "false"}`` or ``{"exclude": "nav, .ad"}`` are accepted.
        """
        if not data:
            return cls()

        schema = CONFIG_SCHEMA["convert"]
        kwargs = {}
        for key, value in data.items():
            key = _ALIASES.get(key, key)
            spec = schema.get(key)
            if spec is None:
                continue
            kwargs[key] = coerce_value(value, spec)

        if "exclude" in kwargs:
            kwargs["exclude"] = tuple(kwargs["exclude"])
        return cls(**kwargs)

    @classmethod
    def coerce(cls, options) -> "ConvertOptions":
        if isinstance(options, cls):
            return options
        return cls.from_dict(options)
