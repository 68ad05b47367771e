from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..models_catalog import (
    Process,
    ProcessDetailBundle,
    ProcessTier,
    ProcessVariable,
    ProcessVariableRange,
    ProcessVendor,
)
from ..resources import (
    PROCESS_TIERS,
    PROCESS_VARIABLE_RANGES,
    PROCESS_VARIABLES,
    PROCESS_VENDORS,
    PROCESSES,
    ResourceDescriptor,
)
from .resource_client import ChildResourceClient, ResourceClient


@dataclass
class ProcessesClient(ResourceClient):
    descriptor: ResourceDescriptor = PROCESSES
    tiers: ChildResourceClient = field(init=False)
    variables: ChildResourceClient = field(init=False)
    vendors: ChildResourceClient = field(init=False)
    variable_ranges: ChildResourceClient = field(init=False)

    def __post_init__(self) -> None:
        self.tiers = ChildResourceClient(self.http, PROCESS_TIERS, self.cache)
        self.variables = ChildResourceClient(self.http, PROCESS_VARIABLES, self.cache)
        self.vendors = ChildResourceClient(self.http, PROCESS_VENDORS, self.cache)
        self.variable_ranges = ChildResourceClient(self.http, PROCESS_VARIABLE_RANGES, self.cache)

    def list_tiers(self, process_id: int | str) -> List[ProcessTier]:
        return self.tiers.list_for(process_id)

    def list_variables(self, process_id: int | str) -> List[ProcessVariable]:
        return self.variables.list_for(process_id)

    def list_vendors(self, process_id: int | str) -> List[ProcessVendor]:
        return self.vendors.list_for(process_id)

    def list_variable_ranges(self, variable_id: int | str) -> List[ProcessVariableRange]:
        return self.variable_ranges.list_for(variable_id)

    def detail_bundle(self, process_id: int | str) -> ProcessDetailBundle:
        process = self.retrieve(process_id)
        assert isinstance(process, Process)
        return ProcessDetailBundle(
            process=process,
            tiers=self.list_tiers(process_id),
            variables=self.list_variables(process_id),
            vendors=self.list_vendors(process_id),
        )
