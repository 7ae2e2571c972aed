"""Instrumented store engines for facade and resolver tests (real sqlite underneath)."""

from .engines import FIXTURE_SCRIPT, GatedEngine, RecordingEngine

__all__ = ["FIXTURE_SCRIPT", "GatedEngine", "RecordingEngine"]
