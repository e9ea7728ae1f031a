"""Per-operation counters that decide when generation is complete."""

from dataclasses import dataclass, field

from restsuite.testcases.data_models import TestCase


def split_quotas(target: int, faulty_ratio: float) -> tuple:
    """Split a target count into (nominal, faulty) quotas.

    The faulty quota is ``target * faulty_ratio`` rounded to the nearest
    integer and the nominal quota takes the rest, so both always sum to the
    target (10 tests at 0.3 gives 7 nominal and 3 faulty).
    """
    if target < 0:
        raise ValueError("target must not be negative")
    if not 0.0 <= faulty_ratio <= 1.0:
        raise ValueError("faulty_ratio must be between 0 and 1")

    faulty = int(round(target * faulty_ratio))
    faulty = min(max(faulty, 0), target)
    return target - faulty, faulty


@dataclass
class GenerationIndex:
    """Counters of one operation's generation.

    Not safe for concurrent mutation. A new index is created at the start of
    every ``generate_for_operation`` call and is never shared between
    operations.
    """
    target: int
    faulty_ratio: float
    generated: int = 0
    nominal: int = 0
    faulty: int = 0
    nominal_quota: int = field(init=False)
    faulty_quota: int = field(init=False)

    def __post_init__(self):
        self.nominal_quota, self.faulty_quota = split_quotas(self.target, self.faulty_ratio)

    @property
    def accepted(self) -> int:
        return self.nominal + self.faulty

    @property
    def remaining(self) -> int:
        return self.target - self.accepted

    def has_next(self) -> bool:
        """True while more test cases are needed."""
        return self.accepted < self.target

    def has_next_nominal(self) -> bool:
        return self.nominal < self.nominal_quota

    def has_next_faulty(self) -> bool:
        return self.faulty < self.faulty_quota

    def accepts(self, test_case: TestCase) -> bool:
        """Whether accepting ``test_case`` keeps every quota respected."""
        if not self.has_next():
            return False
        return self.has_next_faulty() if test_case.faulty else self.has_next_nominal()

    def waive_faulty_quota(self) -> None:
        """Move the unfilled part of the faulty quota to the nominal quota."""
        self.faulty_quota = self.faulty
        self.nominal_quota = self.target - self.faulty_quota

    def record_generated(self, count: int = 1) -> None:
        self.generated += count

    def record_accepted(self, test_case: TestCase) -> None:
        """Count an accepted test case against its quota.

        Raises:
            ValueError: If the matching quota is already full
        """
        if not self.accepts(test_case):
            kind = "faulty" if test_case.faulty else "nominal"
            raise ValueError(f"{kind} quota already reached; cannot accept {test_case.test_case_id}")
        if test_case.faulty:
            self.faulty += 1
        else:
            self.nominal += 1

    def reset(self) -> None:
        self.generated = 0
        self.nominal = 0
        self.faulty = 0
