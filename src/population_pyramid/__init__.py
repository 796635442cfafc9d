"""population_pyramid package.

Turns an age-group census table (male/female counts split by rural and urban
residence) into the two mirrored series of a population pyramid, and keeps
that chart model in sync with the selected view.

Architecture:
- CSV loader → Aggregator → ViewController → renderer
- The Aggregator is pure; all state lives in a `ViewState` owned by the caller
- Pydantic models describe rows and chart models, pandas does the arithmetic
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
