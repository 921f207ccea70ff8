# Aggregate Composition
from hotelhub.composition.projector import FieldSpec, project
from hotelhub.composition.upsert import TableDescriptor, row_to_dict
from hotelhub.composition.guard import ensure_exists
from hotelhub.composition.appender import append_all
from hotelhub.composition.composer import AggregateComposer, AggregateSpec, CollectionSpec

__all__ = [
    'FieldSpec', 'project', 'TableDescriptor', 'row_to_dict',
    'ensure_exists', 'append_all', 'AggregateComposer', 'AggregateSpec', 'CollectionSpec',
]
