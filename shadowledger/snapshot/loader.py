"""
Snapshot loading from plain records (dicts or a JSON document).

Accepts both snake_case keys and the camelCase keys used by the web layer
(suspiciousActivity, auditHistory, createdAt, baseTrustScore, directorName,
from/to, source/target). Missing optional fields fall back to documented
defaults; only records that cannot be used at all (no id, no endpoints, no
timestamp) raise SnapshotError.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping

from shadowledger.core.exceptions import SnapshotError
from shadowledger.ledger_logging import get_logger
from shadowledger.snapshot.models import (
    DEFAULT_BASE_TRUST_SCORE,
    Entity,
    Relationship,
    RelationshipType,
    Snapshot,
    Transaction,
)

logger = get_logger(__name__)

# Timestamps above this are taken to be milliseconds (year ~5138 in seconds).
MILLISECONDS_CUTOFF = 1e11


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _fraction(record: Mapping[str, Any], *keys: str) -> float:
    raw = _pick(record, *keys)
    try:
        return float(raw) if raw is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def _optional_float(record: Mapping[str, Any], *keys: str) -> float | None:
    raw = _pick(record, *keys)
    try:
        return float(raw) if raw is not None else None
    except (TypeError, ValueError):
        return None


def parse_timestamp(value: Any) -> float | None:
    """
    Normalize a timestamp to Unix seconds.

    Numbers above MILLISECONDS_CUTOFF are treated as milliseconds; strings may
    be numeric or ISO 8601 (naive values are taken as UTC). Returns None for
    None or unparseable input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return dt.timestamp()
    if isinstance(value, (int, float)):
        ts = float(value)
        return ts / 1000.0 if abs(ts) > MILLISECONDS_CUTOFF else ts
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return parse_timestamp(float(text))
        except ValueError:
            pass
        try:
            return parse_timestamp(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def entity_from_record(record: Mapping[str, Any]) -> Entity:
    entity_id = _pick(record, "id")
    if entity_id is None or str(entity_id).strip() == "":
        raise SnapshotError("Entity record has no id", record=record)
    entity_type = _pick(record, "type") or ""
    base_trust = _pick(record, "base_trust_score", "baseTrustScore")
    try:
        base_trust_value = float(base_trust) if base_trust is not None else DEFAULT_BASE_TRUST_SCORE
    except (TypeError, ValueError):
        base_trust_value = DEFAULT_BASE_TRUST_SCORE
    director = _pick(record, "director_name", "directorName")
    return Entity(
        id=str(entity_id),
        type=str(entity_type),
        transparency=_fraction(record, "transparency"),
        audit_history=_fraction(record, "audit_history", "auditHistory"),
        suspicious_activity=_fraction(record, "suspicious_activity", "suspiciousActivity"),
        manipulation_score=_fraction(record, "manipulation_score", "manipulationScore"),
        created_at=parse_timestamp(_pick(record, "created_at", "createdAt")),
        base_trust_score=base_trust_value,
        director_name=str(director) if director else None,
        name=_pick(record, "name", "label"),
        prior_trust_score=_optional_float(record, "prior_trust_score", "updated_trust_score", "updatedTrustScore"),
        prior_suspicion_score=_optional_float(record, "prior_suspicion_score", "suspicion_score", "suspicionScore"),
    )


def relationship_from_record(record: Mapping[str, Any]) -> Relationship:
    source = _pick(record, "source", "from")
    target = _pick(record, "target", "to")
    if source is None or target is None:
        raise SnapshotError("Relationship record needs source and target", record=record)
    rel_type = _pick(record, "type") or RelationshipType.LINKED.value
    return Relationship(source=str(source), target=str(target), type=str(rel_type))


def transaction_from_record(record: Mapping[str, Any], index: int = 0) -> Transaction:
    sender = _pick(record, "sender", "from")
    receiver = _pick(record, "receiver", "to")
    if sender is None or receiver is None:
        raise SnapshotError("Transaction record needs sender and receiver", record=record)
    timestamp = parse_timestamp(_pick(record, "timestamp"))
    if timestamp is None:
        raise SnapshotError("Transaction record has no usable timestamp", record=record)
    try:
        amount = float(_pick(record, "amount") or 0.0)
    except (TypeError, ValueError):
        raise SnapshotError("Transaction amount is not numeric", record=record) from None
    tx_id = _pick(record, "id")
    return Transaction(
        id=str(tx_id) if tx_id is not None else f"tx_{index}",
        sender=str(sender),
        receiver=str(receiver),
        amount=amount,
        timestamp=timestamp,
    )


def snapshot_from_records(
    entities: Iterable[Mapping[str, Any]],
    relationships: Iterable[Mapping[str, Any]] = (),
    transactions: Iterable[Mapping[str, Any]] = (),
) -> Snapshot:
    """Build a Snapshot from plain record collections."""
    snapshot = Snapshot(
        entities=tuple(entity_from_record(r) for r in entities),
        relationships=tuple(relationship_from_record(r) for r in relationships),
        transactions=tuple(transaction_from_record(r, i) for i, r in enumerate(transactions)),
    )
    logger.debug(
        "snapshot_loaded",
        entities=len(snapshot.entities),
        relationships=len(snapshot.relationships),
        transactions=len(snapshot.transactions),
    )
    return snapshot


def load_snapshot(path: str | Path) -> Snapshot:
    """Load a JSON document {"entities": [...], "relationships": [...], "transactions": [...]}."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot {path} must be a JSON object")
    return snapshot_from_records(
        data.get("entities") or [],
        data.get("relationships") or [],
        data.get("transactions") or [],
    )


def snapshot_to_records(snapshot: Snapshot) -> dict[str, list[dict[str, Any]]]:
    """Inverse of snapshot_from_records (snake_case keys, timestamps in seconds)."""
    return {
        "entities": [e.to_dict() for e in snapshot.entities],
        "relationships": [
            {"source": r.source, "target": r.target, "type": r.type_value}
            for r in snapshot.relationships
        ],
        "transactions": [
            {
                "id": t.id,
                "from": t.sender,
                "to": t.receiver,
                "amount": t.amount,
                "timestamp": t.timestamp,
            }
            for t in snapshot.transactions
        ],
    }
