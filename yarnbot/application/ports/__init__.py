"""Application ports package."""

from yarnbot.application.ports.catalog_port import ProductCatalogPort, ProductFilter
from yarnbot.application.ports.clock_port import ClockPort
from yarnbot.application.ports.random_port import RandomSource
from yarnbot.application.ports.telemetry_port import TelemetryPort
from yarnbot.application.ports.translator_port import TranslatorPort

__all__ = [
    "ClockPort",
    "ProductCatalogPort",
    "ProductFilter",
    "RandomSource",
    "TelemetryPort",
    "TranslatorPort",
]
