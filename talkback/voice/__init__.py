"""Voice activity segmentation, echo gating and per-session orchestration."""

__all__: list[str] = []
