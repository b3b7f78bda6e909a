from scenepanel_core.config import CoreConfig, load_core_config
from scenepanel_core.home import ScenePanelPaths, ensure_scenepanel_layout, resolve_scenepanel_home
from scenepanel_core.scene import Drawable, SceneRegistry

__version__ = "0.1.0"

__all__ = [
    "CoreConfig",
    "Drawable",
    "ScenePanelPaths",
    "SceneRegistry",
    "__version__",
    "ensure_scenepanel_layout",
    "load_core_config",
    "resolve_scenepanel_home",
]
