from forecaster.tools.suggestions import LocationSuggester
from forecaster.tools.weather_report import WeatherReport, WeatherReporter

__all__ = ["LocationSuggester", "WeatherReport", "WeatherReporter"]
