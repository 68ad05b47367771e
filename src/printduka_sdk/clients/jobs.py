from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..models_operations import JobVendorStage
from ..resources import JOB_VENDOR_STAGES, JOBS, ResourceDescriptor
from .base import Payload
from .resource_client import ChildResourceClient, ResourceClient


@dataclass
class JobsClient(ResourceClient):
    descriptor: ResourceDescriptor = JOBS
    stages: ChildResourceClient = field(init=False)

    def __post_init__(self) -> None:
        self.stages = ChildResourceClient(self.http, JOB_VENDOR_STAGES, self.cache)

    def vendor_stages(self, job_id: int | str) -> List[JobVendorStage]:
        return self.stages.list_for(job_id)

    def create_vendor_stage(self, payload: Payload) -> JobVendorStage:
        stage = self.stages.create(payload)
        self.invalidate()
        return stage

    def update_vendor_stage(self, stage_id: int | str, payload: Payload) -> JobVendorStage:
        stage = self.stages.update(stage_id, payload)
        self.invalidate()
        return stage
