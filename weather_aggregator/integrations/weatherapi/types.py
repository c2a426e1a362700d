import pydantic


class Location(pydantic.BaseModel):
    name: str
    country: str


class Condition(pydantic.BaseModel):
    text: str
    icon: str


class Current(pydantic.BaseModel):
    temp_c: float
    feelslike_c: float
    humidity: int
    pressure_mb: float
    wind_kph: float
    wind_degree: int
    condition: Condition


class CurrentWeatherResponse(pydantic.BaseModel):
    location: Location
    current: Current


class ErrorDetails(pydantic.BaseModel):
    code: int | None = None
    message: str = ""


class ErrorResponse(pydantic.BaseModel):
    error: ErrorDetails
