"""Fund domain registry.

Each hospital fund (medicine, operation, optics, hospital) runs the same
ledger engine; a ``LedgerDomain`` holds the few things that differ between
them.
"""

from dataclasses import dataclass
from typing import Optional

from clinicledger.domain.entities import EntryType
from clinicledger.domain.errors import NotFoundError, domain_not_found


@dataclass(frozen=True)
class LedgerDomain:
    """Configuration of one independently balanced fund."""

    key: str
    label: str
    prefixes: dict[EntryType, str]
    purchase_category: Optional[str] = None
    sale_category: Optional[str] = None
    case_sensitive_categories: bool = True

    def prefix_for(self, entry_type: EntryType) -> str:
        return self.prefixes[entry_type]


@dataclass(frozen=True)
class DerivedLedgerConfig:
    """A ledger built from one category of another domain's entries."""

    key: str
    label: str
    source_domain: str
    category_name: str
    entry_type: EntryType = EntryType.EXPENSE


def _prefixes(code: str) -> dict[EntryType, str]:
    return {
        EntryType.FUND_IN: f"{code}FI",
        EntryType.FUND_OUT: f"{code}FO",
        EntryType.INCOME: f"{code}I",
        EntryType.EXPENSE: f"{code}E",
    }


MEDICINE = LedgerDomain(
    key="medicine",
    label="Medicine Account",
    prefixes=_prefixes("M"),
    purchase_category="medicine_purchase",
    sale_category="medicine_sale",
)

OPERATION = LedgerDomain(
    key="operation",
    label="Operation Account",
    prefixes=_prefixes("O"),
)

OPTICS = LedgerDomain(
    key="optics",
    label="Optics Account",
    prefixes=_prefixes("OP"),
)

HOSPITAL = LedgerDomain(
    key="hospital",
    label="Hospital Account",
    prefixes=_prefixes("H"),
)

HOUSE_SECURITY = DerivedLedgerConfig(
    key="house-security",
    label="House Security Ledger",
    source_domain=HOSPITAL.key,
    category_name="House Security",
)

DOMAINS: dict[str, LedgerDomain] = {d.key: d for d in (MEDICINE, OPERATION, OPTICS, HOSPITAL)}
DERIVED_LEDGERS: dict[str, DerivedLedgerConfig] = {HOUSE_SECURITY.key: HOUSE_SECURITY}


def get_domain(domain: "str | LedgerDomain") -> LedgerDomain:
    """Resolve a domain key (or pass through a LedgerDomain).

    Raises:
        NotFoundError: If the key is not registered
    """
    if isinstance(domain, LedgerDomain):
        return domain
    try:
        return DOMAINS[domain.strip().lower()]
    except KeyError:
        raise NotFoundError(domain_not_found(domain)) from None
