from rubik_player.core.cube_model import CubeModel

__all__ = ["CubeModel"]
