import math

from .errors import NumShardsIsZeroError


class MultiShardCoordinator:
    """Maps an address to its shard using the trailing address bytes."""

    def __init__(self, num_shards: int):
        if num_shards == 0:
            raise NumShardsIsZeroError()
        self.num_shards = num_shards
        self.mask_high, self.mask_low = self._calculate_masks(num_shards)

    @staticmethod
    def _calculate_masks(num_shards: int):
        n = math.ceil(math.log2(num_shards))
        return (1 << n) - 1, (1 << max(n - 1, 0)) - 1

    def compute_id(self, address: bytes) -> int:
        bytes_needed = self.num_shards // 256 + 1
        start = max(len(address) - bytes_needed, 0)

        addr = int.from_bytes(address[start:], "big")
        shard = addr & self.mask_high
        if shard > self.num_shards - 1:
            shard = addr & self.mask_low
        return shard
