"""Background workers for the aid distribution ledger"""
from .aggregate_maintainer import AggregateMaintainerWorker
from .budget_reconciler import BudgetReconcilerWorker
from .schema_manager import SchemaManager

__all__ = ["AggregateMaintainerWorker", "BudgetReconcilerWorker", "SchemaManager"]
