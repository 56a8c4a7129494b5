"""Senate roster extraction service - resilient scraping of the current senators table."""

__version__ = "0.1.0"

from senate_roster.cache import RosterCache as RosterCache
from senate_roster.engine import RosterEngine as RosterEngine
from senate_roster.models import LegislatorRecord as LegislatorRecord
from senate_roster.models import Party as Party
from senate_roster.service import RosterService as RosterService
