import pydantic


class Main(pydantic.BaseModel):
    temp: float
    feels_like: float
    humidity: int
    pressure: int


class Wind(pydantic.BaseModel):
    speed: float = 0.0
    deg: int = 0


class Condition(pydantic.BaseModel):
    description: str
    icon: str


class Sys(pydantic.BaseModel):
    sunrise: int | None = None
    sunset: int | None = None


class CurrentWeatherResponse(pydantic.BaseModel):
    name: str
    main: Main
    wind: Wind = Wind()
    weather: list[Condition] = []
    sys: Sys = Sys()
