from __future__ import annotations

from garden.core.config import Settings


def make_settings(**overrides) -> Settings:
    values = dict(
        _env_file=None,
        env="test",
        debug=False,
        docs_enabled=False,
        log_level="DEBUG",
        cors_origins=["http://localhost"],
        trusted_hosts=["testserver", "localhost"],
        seed_demo_data=False,
    )
    values.update(overrides)
    return Settings(**values)
