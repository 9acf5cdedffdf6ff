from .pinmap import PinMap
from .response_queue import ResponseQueue
from .sd import SdCard, SpiState, Exchange
from .spi_host import SpiHost
from .ports import ParallelPort

__all__ = [
    "PinMap", "ResponseQueue", "SdCard", "SpiState", "Exchange",
    "SpiHost", "ParallelPort",
]
