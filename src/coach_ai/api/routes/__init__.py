"""API route modules."""

from . import coach, push, service_worker, vision, voice, workouts

__all__ = ["coach", "push", "service_worker", "vision", "voice", "workouts"]
