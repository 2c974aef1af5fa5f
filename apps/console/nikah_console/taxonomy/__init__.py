from nikah_console.taxonomy.delete import DeleteConfirmation, DeleteState, can_delete
from nikah_console.taxonomy.domains import DOMAINS, DomainSpec, FieldSpec, LevelSpec, RecordSchema
from nikah_console.taxonomy.editor import CountryLanguages, TaxonomyEditor
from nikah_console.taxonomy.form import EntityForm
from nikah_console.taxonomy.navigator import HierarchyNavigator
from nikah_console.taxonomy.reorder import ReorderableList

__all__ = [
    "DeleteConfirmation",
    "DeleteState",
    "can_delete",
    "DOMAINS",
    "DomainSpec",
    "FieldSpec",
    "LevelSpec",
    "RecordSchema",
    "CountryLanguages",
    "TaxonomyEditor",
    "EntityForm",
    "HierarchyNavigator",
    "ReorderableList",
]
