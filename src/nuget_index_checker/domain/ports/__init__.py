from .resource_probe import ResourceProbePort, SleepFn

__all__ = ["ResourceProbePort", "SleepFn"]
