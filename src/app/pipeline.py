# src/app/pipeline.py
"""
One dump run: WaypointData.dat in, three artifacts out.

    bytes -> decompress -> decode -> typed tree
        typed tree -> to_generic -> generic tree -> extract_records -> rows
        typed tree -> build_commands -> grouped commands

Everything is derived in memory first (build_artifacts); files are only
written once decoding and derivation have succeeded, so a malformed input
leaves the output directory untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from env.schema import DumpConfig
from export.writers import write_commands, write_csv, write_json
from nbt_tree.container import decompress
from nbt_tree.decoder import decode
from nbt_tree.generic import GenericValue, to_generic
from nbt_tree.schema import CompoundTag
from waypoints.commands import build_commands
from waypoints.extractor import extract_records
from waypoints.schema import WaypointRecord


log = logging.getLogger(__name__)

JSON_FILENAME = "waypoints.json"
CSV_FILENAME = "waypoints.csv"
COMMANDS_FILENAME = "create_waypoints.txt"


@dataclass
class DumpArtifacts:
    """In-memory results of one run, before anything touches disk."""
    tree: CompoundTag
    generic: GenericValue
    records: List[WaypointRecord]
    commands: Dict[str, List[str]]

    @property
    def command_count(self) -> int:
        return sum(len(lines) for lines in self.commands.values())


@dataclass
class DumpResult:
    """Where the artifacts went and what they contain."""
    json_path: Path
    csv_path: Optional[Path]
    commands_path: Path
    record_count: int
    command_count: int
    group_counts: Dict[str, int] = field(default_factory=dict)


def build_artifacts(data: bytes, config: Optional[DumpConfig] = None) -> DumpArtifacts:
    """Decode raw file bytes and derive every artifact in memory."""
    config = config or DumpConfig()

    payload = decompress(
        data,
        data_filename=config.data_filename,
        data_extension=config.data_extension,
    )
    tree = decode(payload)
    generic = to_generic(tree)
    records = extract_records(generic, config)
    commands = build_commands(tree, config)

    return DumpArtifacts(tree=tree, generic=generic, records=records, commands=commands)


def write_artifacts(artifacts: DumpArtifacts, out_dir: Path) -> DumpResult:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    json_path = write_json(out_dir / JSON_FILENAME, artifacts.generic)
    log.info("Wrote %s", json_path)

    csv_path = write_csv(out_dir / CSV_FILENAME, artifacts.records)
    if csv_path is not None:
        log.info("Wrote %s", csv_path)
    else:
        log.warning("CSV not generated (structure not recognized). JSON includes full tree.")

    commands_path = write_commands(out_dir / COMMANDS_FILENAME, artifacts.commands)
    log.info(
        "Wrote %s with %d commands across %d groups",
        commands_path,
        artifacts.command_count,
        len(artifacts.commands),
    )

    return DumpResult(
        json_path=json_path,
        csv_path=csv_path,
        commands_path=commands_path,
        record_count=len(artifacts.records),
        command_count=artifacts.command_count,
        group_counts={name: len(lines) for name, lines in artifacts.commands.items()},
    )


def run_dump(
    input_path: Path,
    out_dir: Path,
    config: Optional[DumpConfig] = None,
) -> DumpResult:
    """
    Main entry point: read `input_path`, write all artifacts into `out_dir`.

    Raises ContainerFormatError / DecodeError (and OSError for unreadable
    input) without writing any file.
    """
    input_path = Path(input_path).resolve()
    log.info("Input: %s", input_path)
    log.info("Output dir: %s", Path(out_dir).resolve())

    artifacts = build_artifacts(input_path.read_bytes(), config)
    return write_artifacts(artifacts, out_dir)


__all__ = [
    "JSON_FILENAME",
    "CSV_FILENAME",
    "COMMANDS_FILENAME",
    "DumpArtifacts",
    "DumpResult",
    "build_artifacts",
    "write_artifacts",
    "run_dump",
]
