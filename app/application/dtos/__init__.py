"""Application-layer data transfer objects."""

from app.application.dtos.history_dtos import ConditionHistoryDTO, HistoryEntryDTO

__all__ = ["ConditionHistoryDTO", "HistoryEntryDTO"]
