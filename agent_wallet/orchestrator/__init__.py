"""Agent lifecycle orchestration."""

__all__: list[str] = []
