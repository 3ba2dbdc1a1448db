from .trace_formatter import TraceFormatter
from .state_formatter import StateFormatter
from .listing_formatter import ListingFormatter
