from .redis import RedisFake, RedisPipelineFake
from .tasks import TaskDirectoryFake

__all__ = ["RedisFake", "RedisPipelineFake", "TaskDirectoryFake"]
