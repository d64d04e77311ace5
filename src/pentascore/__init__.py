"""
pentascore v1.0 - Modern Pentathlon Scoring Engine

Pure computation core for a multi-discipline pentathlon competition.
Callers hand in plain data (seeds, raw performances, cumulative points)
and get plain data back; nothing here touches storage or the network.

Main components:
- draw: Positional math for single-elimination tableaux
- bracket: Fencing direct-elimination bracket engine
- scoring: Points calculators for all six disciplines plus the
  laser-run handicap start order
- disciplines: Shared discipline and age-category vocabulary
- config: Settings loaded from PENTASCORE_* environment variables
"""

__version__ = "1.0.0"
