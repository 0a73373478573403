"""
ShadowLedger: suspicion scoring and trust decay over an entity relationship graph.

Subpackages: snapshot (input models, loader, generator), analysis_engine
(cascade, proximity, detectors, scorer, pipeline), analytics (sector views),
config and ledger_logging.
"""

__version__ = "0.1.0"
