"""
Search topology provisioning.

Exports: IndexVariant, ProvisioningOrchestrator, PullPipelineTopology, TopologyBuilder
"""

from .orchestrator import IndexVariant, ProvisioningOrchestrator
from .topology import PullPipelineTopology, TopologyBuilder

__all__ = [
    "IndexVariant",
    "ProvisioningOrchestrator",
    "PullPipelineTopology",
    "TopologyBuilder",
]
