"""Run configuration for batch threshold experiments."""

from .manifest import ExperimentSpec, RunConfig

__all__ = ['ExperimentSpec', 'RunConfig']
