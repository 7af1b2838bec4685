class HeatmapError(Exception):
    """Base class for fatal heat map configuration and input errors."""


class TimeUnitError(HeatmapError):
    def __init__(self, units: str):
        self.units = units
        super().__init__(f'Can\'t parse time units "{units}". Try "ms" etc.')


class TooManyColumnsError(HeatmapError):
    def __init__(self, estimated: float, limit: int):
        self.estimated = estimated
        self.limit = limit
        super().__init__(
            f"Too many columns ({estimated:.0f} > {limit}); try setting --unitstime ?"
        )


class ResolutionTooHighError(HeatmapError):
    def __init__(self, step_lat: float):
        self.step_lat = step_lat
        super().__init__(
            f"Row resolution too high (latency step {step_lat}); "
            "try fewer --rows or an explicit --steplat"
        )
