"""Utility helpers for Subrayado."""

from subrayado.utils.logger import get_logger

__all__ = ["get_logger"]
