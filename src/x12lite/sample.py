"""Synthetic X12 interchanges for fixtures, benchmarks and tests.

Builds a 271-shaped (eligibility response) interchange through the selector
write API itself:
- ISA/GS/ST envelope with matching control numbers
- one HL/NM1 loop per member, hierarchy numbers filled by auto-numbering
- a run of EB segments per member with repeated EB-03 service types
- SE/GE/IEA trailers whose counts come from ``(?)`` reads
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime

from x12lite.document import Document
from x12lite.write import AUTO_NUMBER

SERVICE_TYPES = ["1", "30", "33", "35", "47", "48", "50", "86", "88", "98", "AL", "MH", "UC"]
LAST_NAMES = ["SMITH", "JONES", "GARCIA", "NGUYEN", "PATEL", "MILLER", "DAVIS"]
FIRST_NAMES = ["ALEX", "SAM", "JORDAN", "TAYLOR", "MORGAN", "CASEY", "RILEY"]


@dataclass
class MemberSpec:
    member_id: str
    last_name: str
    first_name: str
    benefits: list[tuple[str, list[str]]] = field(default_factory=list)


def random_members(count: int, benefits: int = 3, seed: int = 1234) -> list[MemberSpec]:
    rng = random.Random(seed)
    members = []
    for _ in range(count):
        spec = MemberSpec(
            member_id=f"M{rng.randint(0, 99_999_999):08d}",
            last_name=rng.choice(LAST_NAMES),
            first_name=rng.choice(FIRST_NAMES),
        )
        for _ in range(benefits):
            code = rng.choice(["1", "6", "B", "C", "G"])
            spec.benefits.append((code, rng.sample(SERVICE_TYPES, k=rng.randint(1, 3))))
        members.append(spec)
    return members


def synthetic_interchange(
    members: int = 2,
    benefits: int = 3,
    seed: int = 1234,
    control: int = 1,
    sender: str = "SENDER",
    receiver: str = "RECEIVER",
    stamp: datetime | None = None,
) -> Document:
    """Assemble a deterministic 271 interchange."""
    stamp = stamp or datetime(2024, 6, 26, 9, 6)
    doc = Document()
    doc.update(
        {
            "ISA-5": "ZZ",
            "ISA-6": sender,
            "ISA-7": "ZZ",
            "ISA-8": receiver,
            "ISA-9": stamp.strftime("%y%m%d"),
            "ISA-10": stamp.strftime("%H%M"),
            "ISA-13": f"{control:09d}",
        }
    )
    doc["GS"] = [
        "HB", sender, receiver, stamp.strftime("%Y%m%d"), stamp.strftime("%H%M"),
        str(control), "X", "005010X279A1",
    ]
    doc["ST"] = ["271", "0001", "005010X279A1"]
    doc["BHT"] = [
        "0022", "11", f"REF{control:06d}", stamp.strftime("%Y%m%d"), stamp.strftime("%H%M"),
    ]

    for spec in random_members(members, benefits=benefits, seed=seed):
        doc.set("HL(+)-1", AUTO_NUMBER)
        doc["HL-3"] = ["22", "0"]
        doc["NM1(+)"] = [
            "IL", "1", spec.last_name, spec.first_name, "", "", "", "MI", spec.member_id,
        ]
        for code, services in spec.benefits:
            doc["EB(+)-1"] = code
            doc["EB-3(1)"] = services

    # SE-01 counts ST through SE inclusive
    isa, gs = doc.find("ISA(?)", "GS(?)")
    doc["SE"] = [str(len(doc) - isa - gs + 1), "0001"]  # type: ignore[operator]
    doc["GE"] = ["1", str(control)]
    doc["IEA"] = ["1", f"{control:09d}"]
    return doc
