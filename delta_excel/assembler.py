from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from delta_common.schema import Mode, WeaponCode


@dataclass
class NameCarry:
    """
    Carried-forward weapon name for one region.

    The sheets merge the name cell across all builds of a weapon, so a blank
    name means "same weapon as the last named row" within that region.
    """

    name: str = ""

    def resolve(self, cell_name: str) -> str:
        return cell_name or self.name

    def remember(self, cell_name: str) -> None:
        if cell_name:
            self.name = cell_name


class RecordAssembler:
    """
    Owns the ID counter of one extraction run and the records emitted so far.

    IDs are handed out only when a record is emitted, so skipped rows never
    leave gaps. Share one assembler between parsers to get a single sequence.
    """

    def __init__(self, start: int = 0) -> None:
        self.next_id = start
        self.records: List[WeaponCode] = []

    def emit(
        self,
        *,
        mode: Mode,
        name: str,
        tier: str,
        price: Optional[int],
        build: str,
        code: str,
        source: str,
        range: Optional[int] = None,
        update_time: Optional[str] = None,
    ) -> WeaponCode:
        record = WeaponCode(
            id=str(self.next_id),
            mode=mode,
            name=name,
            tier=tier,
            price=price,
            build=build,
            code=code,
            range=range,
            update_time=update_time,
            source=source,
        )
        self.next_id += 1
        self.records.append(record)
        return record

    def since(self, mark: int) -> List[WeaponCode]:
        """Records emitted after ``mark = len(assembler.records)`` was taken."""

        return self.records[mark:]

    def __len__(self) -> int:
        return len(self.records)
