from .axes import AXIS_KEY, AxisType, EnumeratedAxis, LinearAxis

__all__ = ["AXIS_KEY", "AxisType", "EnumeratedAxis", "LinearAxis"]
