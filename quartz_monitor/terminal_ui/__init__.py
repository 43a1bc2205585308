from .app import QuartzMonitorApp

__all__ = ["QuartzMonitorApp"]
