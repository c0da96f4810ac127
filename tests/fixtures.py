"""
Shared test snapshot.

A small pack with two dens, their scouts and leaders, plus an event record
that references known and unknown records through body and nested fields.
"""

from packviz.contracts.records import Record, to_field
from packviz.core.keys import RecordSet
from packviz.ingestion import ingest


def pack_records():
    """Raw host records, in host order (deliberately not key-sorted)."""
    return [
        {"typeId": "pack", "recordId": "1", "fields": {"name": "Troop Alpha"}},
        {
            "typeId": "den", "recordId": "wolf", "parent": "pack:1",
            "fields": {
                "name": "Wolf Den",
                "leaders": ["[[adult:jane]]", "[[adult:raj]] (assistant)", 42],
            },
        },
        {"typeId": "den", "recordId": "bear", "parent": "pack:1", "fields": {"name": "Bear Den"}},
        {"typeId": "scout", "recordId": "ben", "parent": "den:wolf", "fields": {"fullName": "Ben Ortiz"}},
        {"typeId": "scout", "recordId": "amy", "parent": "den:wolf", "fields": {"name": "Amy"}},
        {
            "typeId": "scout", "recordId": "cal", "parentKey": "den:bear",
            "body": "Buddy: [[scout:amy]]", "fields": {"name": "Cal"},
        },
        {"typeId": "adult", "recordId": "jane", "parent": "den:wolf", "fields": {"name": "Jane Doe"}},
        {
            "typeId": "event", "recordId": 7, "recordKey": "event:campout",
            "body": "Attending: [[den:wolf]], [[den:bear]] and [[scout:zed]]. Notes [[bring tents]]",
            "fields": {
                "title": "Spring Campout",
                "gear": ["[[item:tent]]", {"lead": "[[adult:jane]]", "count": 3}],
                "cancelled": False,
                "cost": None,
            },
        },
    ]


def pack_record_set() -> RecordSet:
    return ingest(pack_records())


def make_record(
    type_id="note",
    record_id="1",
    record_key=None,
    parent=None,
    body=None,
    fields=None
) -> Record:
    """Build a normalized record directly."""
    return Record(
        type_id=type_id,
        record_id=record_id,
        record_key=record_key,
        parent=parent,
        body=body,
        fields=to_field(fields or {}),
    )
