from .psutil_probe import PsutilNetworkProbe
from .static import StaticNetworkProbe

__all__ = ["PsutilNetworkProbe", "StaticNetworkProbe"]
