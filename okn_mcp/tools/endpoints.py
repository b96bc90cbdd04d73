"""Registry of the FRINK SPARQL endpoints served by the OKN MCP server."""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Optional

# Identifiers become part of tool names, so underscores are not allowed.
IDENTIFIER_PATTERN = re.compile(r'^[a-z0-9]+(-[a-z0-9]+)*$')

# Reserved because `query_federated` is already a fixed tool.
RESERVED_IDENTIFIERS = frozenset({'federated'})


@dataclass(frozen=True)
class EndpointDescriptor:
    """A single knowledge graph and its SPARQL endpoint."""
    identifier: str
    url: str
    domain: str
    description: str

    def to_listing(self) -> Dict[str, Any]:
        return {
            'name': self.identifier,
            'endpoint': self.url,
            'domain': self.domain,
            'description': self.description,
        }


class EndpointRegistry:
    """Read-only, ordered lookup table of knowledge graph endpoints.

    Entries keep their definition order so that tool catalogs are stable
    across runs. The federated endpoint is held separately and is never
    part of the iteration.
    """

    def __init__(self, entries: Iterable[EndpointDescriptor], federated_url: str):
        """Build the registry.

        Args:
            entries: Endpoint descriptors in catalog order
            federated_url: URL of the endpoint that queries across all graphs

        Raises:
            ValueError: If an identifier is malformed, reserved or duplicated
        """
        by_identifier: Dict[str, EndpointDescriptor] = {}
        for entry in entries:
            if not IDENTIFIER_PATTERN.match(entry.identifier):
                raise ValueError(
                    f"Invalid knowledge graph identifier {entry.identifier!r}: "
                    "use lowercase letters, digits and single hyphens"
                )
            if entry.identifier in RESERVED_IDENTIFIERS:
                raise ValueError(f"Knowledge graph identifier {entry.identifier!r} is reserved")
            if entry.identifier in by_identifier:
                raise ValueError(f"Duplicate knowledge graph identifier {entry.identifier!r}")
            by_identifier[entry.identifier] = entry

        self._entries = MappingProxyType(by_identifier)
        self._federated_url = federated_url

    @property
    def federated_url(self) -> str:
        return self._federated_url

    def get(self, identifier: str) -> Optional[EndpointDescriptor]:
        return self._entries.get(identifier)

    def __iter__(self) -> Iterator[EndpointDescriptor]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def as_listing(self) -> List[Dict[str, Any]]:
        """Return every entry as a plain dictionary, in registry order."""
        return [entry.to_listing() for entry in self]


FRINK_BASE_URL = 'https://frink.apps.renci.org'
FRINK_FEDERATED_ENDPOINT = f'{FRINK_BASE_URL}/federation/sparql'


def _frink(identifier: str, domain: str, description: str) -> EndpointDescriptor:
    return EndpointDescriptor(
        identifier=identifier,
        url=f'{FRINK_BASE_URL}/{identifier}/sparql',
        domain=domain,
        description=description,
    )


FRINK_ENDPOINTS = (
    _frink('biobricks-ice', 'Cheminformatics and Chemical Safety',
           'Open knowledge graph for cheminformatics and chemical safety'),
    _frink('biohealth', 'Healthcare and Social Determinants',
           'Dynamically-updated network integrating biomedical insights with social determinants of health'),
    _frink('climatepub4kg', 'Climate Science',
           'Knowledge graph to support evaluation and development of climate models'),
    _frink('dreamkg', 'Homelessness and Social Services',
           'Dynamic, Responsive, Adaptive, and Multifaceted KG to Address Homelessness with Explainable AI'),
    _frink('fiokg', 'Food and Water Safety',
           'Part of SAWGraph project for monitoring contaminants in food and water systems'),
    _frink('geoconnex', 'Hydrology and Water Resources',
           'Community-driven KG linking U.S. hydrologic features for seamless water data discovery'),
    _frink('hydrologykg', 'Hydrology',
           'Part of SAWGraph project focused on hydrological data'),
    _frink('scales', 'Criminal Justice',
           'Integrated justice platform knowledge graph'),
    _frink('securechainkg', 'Software Supply Chain Security',
           'Knowledge graph for software supply chain security'),
    _frink('semopenalex', 'Scientific Publications',
           'Comprehensive information on scientific publications and related entities'),
    _frink('sockg', 'Soil Carbon',
           'Soil carbon modeling for voluntary carbon markets'),
    _frink('spatialkg', 'Spatial/Geographic Data',
           'Spatial and geographic knowledge graph'),
    _frink('spoke', 'Precision Medicine',
           'Scalable Precision Medicine Open Knowledge Engine integrating NASA GeneLab with health data'),
    _frink('sudokn', 'Manufacturing Capabilities',
           'Manufacturing capability data for small and medium enterprises'),
    _frink('ubergraph', 'Biomedical Ontologies',
           'Integrated suite of OBO ontologies with precomputed inferred relationships'),
    _frink('wildlifekg', 'Wildlife Management',
           'Wildlife management in the context of climate change'),
    _frink('wikidata', 'Universal Knowledge Backbone',
           'Free, open, collaborative knowledge base (OKN backbone)'),
    _frink('sawgraph', 'Agricultural Safety and Water Quality',
           'Safe Agricultural Products and Water Graph - monitoring PFAS and contaminants'),
)

FRINK_REGISTRY = EndpointRegistry(FRINK_ENDPOINTS, FRINK_FEDERATED_ENDPOINT)
