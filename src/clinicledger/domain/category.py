"""Category domain service."""

import logging
from typing import Optional

from clinicledger.database.base import Database, LedgerWriter
from clinicledger.domain.domains import LedgerDomain, get_domain
from clinicledger.domain.entities import ExpenseCategory
from clinicledger.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_inactive,
    category_not_found,
    duplicate_category,
)

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255


def _clean_name(name: Optional[str], field: str = "name") -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Category name is required", field=field)
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Category name must be at most {MAX_NAME_LENGTH} characters", field=field)
    return name


def resolve_category(
    writer: LedgerWriter,
    ledger_domain: LedgerDomain,
    label: Optional[str],
    category_id: Optional[int],
) -> ExpenseCategory:
    """Resolve a (label, id) pair to a canonical category.

    If an id is given its category wins and supplies the label. Otherwise
    the label is looked up and created (active) when missing. Runs inside
    the caller's writer so a created category is rolled back with the
    transaction that needed it.

    Raises:
        NotFoundError: If category_id does not exist in the domain
        ValidationError: If neither is given, or the category is inactive
    """
    if category_id is not None:
        category = writer.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
    else:
        name = _clean_name(label, field="category")
        category = writer.get_category_by_name(name, ledger_domain.case_sensitive_categories)
        if category is None:
            category = writer.create_category(name)
            logger.info("Created category '%s' in %s", name, ledger_domain.key)

    if not category.is_active:
        raise ValidationError(category_inactive(category.name), field="category")
    return category


class CategoryService:
    """Service for managing a domain's expense categories."""

    def __init__(self, db: Database, domain: "str | LedgerDomain"):
        """Initialize category service.

        Args:
            db: Database instance
            domain: Fund domain key or configuration
        """
        self.db = db
        self.domain = get_domain(domain)

    def resolve(self, label: Optional[str], category_id: Optional[int] = None) -> ExpenseCategory:
        """Resolve (and create if needed) a category outside of a transaction."""
        with self.db.writer(self.domain.key) as writer:
            return resolve_category(writer, self.domain, label, category_id)

    def create_category(self, name: str) -> ExpenseCategory:
        """Create a category.

        Raises:
            ValidationError: If the name is empty or too long
            ConflictError: If the name is already used in this domain
        """
        name = _clean_name(name)
        with self.db.writer(self.domain.key) as writer:
            if writer.get_category_by_name(name, self.domain.case_sensitive_categories) is not None:
                raise ConflictError(duplicate_category(name, self.domain.label))
            category = writer.create_category(name)
        logger.info("Created category '%s' in %s", name, self.domain.key)
        return category

    def get_category(self, category_id: int) -> Optional[ExpenseCategory]:
        """Get a category of this domain by ID."""
        category = self.db.get_category(category_id)
        if category is None or category.domain != self.domain.key:
            return None
        return category

    def require_category(self, category_id: int) -> ExpenseCategory:
        """Get a category by ID or raise NotFoundError."""
        category = self.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_name(self, name: str) -> Optional[ExpenseCategory]:
        return self.db.get_category_by_name(
            self.domain.key, name.strip(), self.domain.case_sensitive_categories
        )

    def list_categories(self, active_only: bool = False) -> list[ExpenseCategory]:
        return self.db.list_categories(self.domain.key, active_only=active_only)

    def list_categories_with_counts(self, active_only: bool = False) -> list[tuple[ExpenseCategory, int]]:
        """List categories with the number of transactions in each."""
        counts = self.db.get_category_transaction_counts(self.domain.key)
        return [(cat, counts.get(cat.id, 0)) for cat in self.list_categories(active_only)]

    def rename_category(self, category_id: int, name: str) -> ExpenseCategory:
        """Rename a category.

        Existing transactions keep the label they were recorded with.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If another category already has the name
        """
        name = _clean_name(name)
        with self.db.writer(self.domain.key) as writer:
            if writer.get_category(category_id) is None:
                raise NotFoundError(category_not_found(category_id))
            existing = writer.get_category_by_name(name, self.domain.case_sensitive_categories)
            if existing is not None and existing.id != category_id:
                raise ConflictError(duplicate_category(name, self.domain.label))
            return writer.update_category(category_id, name=name)

    def set_active(self, category_id: int, is_active: bool) -> ExpenseCategory:
        """Activate or deactivate a category."""
        with self.db.writer(self.domain.key) as writer:
            category = writer.update_category(category_id, is_active=is_active)
        logger.info(
            "%s category %s in %s", "Activated" if is_active else "Deactivated", category_id, self.domain.key
        )
        return category

    def delete_category(self, category_id: int) -> None:
        """Delete a category that no transaction references.

        Raises:
            NotFoundError: If the category does not exist
            DependencyError: If transactions reference it
        """
        with self.db.writer(self.domain.key) as writer:
            if writer.get_category(category_id) is None:
                raise NotFoundError(category_not_found(category_id))
            count = writer.get_category_transaction_count(category_id)
            if count > 0:
                raise DependencyError(category_delete_blocked(category_id, count))
            writer.delete_category(category_id)
