from .config import ConfigManager
from .portal import ArcGISSessionProvider, ArcGISCatalog, ArcGISMapResolver

class ServiceLocator:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ServiceLocator, cls).__new__(cls)
            cls._instance.is_ready = False
        return cls._instance

    def init(self, config_path: str):
        if self.is_ready: return

        self.config = ConfigManager(config_path)

        # Portal collaborators
        self.sessions = ArcGISSessionProvider(self.config.data.portal)
        self.catalog = ArcGISCatalog()
        self.maps = ArcGISMapResolver()

        # Portal settings are read when a session is created
        self.config.on_changed.connect(self._on_config_change)

        self.is_ready = True

    def _on_config_change(self, section, key, value):
        if section == "portal":
            self.sessions = ArcGISSessionProvider(self.config.data.portal)

# Global access
sl = ServiceLocator()
