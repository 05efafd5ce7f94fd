"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, service d'insights) et expose un
singleton `container` utilisé par la couche API.
"""

from chart_insights.core.settings import get_settings
from chart_insights.domain.services import InsightService


class Container:
    def __init__(self):
        self.settings = get_settings()
        self.insights = InsightService(
            rulership_mode=self.settings.RULERSHIP_MODE,
            max_key_aspects=self.settings.KEY_ASPECTS_MAX,
        )


container = Container()
