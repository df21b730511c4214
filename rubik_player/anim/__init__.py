from rubik_player.anim.animation_queue import AnimationQueue, CubeVisual, PendingTurn

__all__ = ["AnimationQueue", "CubeVisual", "PendingTurn"]
