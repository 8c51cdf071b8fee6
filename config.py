"""
Configuration parameters for the Chord lookup simulator.
"""

# Chord Parameters
M = 8  # Identifier space size: 2^M positions (default: 256)
IDENTIFIER_SPACE = 2 ** M

# Lookup hop bound is HOP_LIMIT_FACTOR * M + IDENTIFIER_SPACE
HOP_LIMIT_FACTOR = 3

# Simulation Parameters
NUM_NODES = 10
NUM_KEYS = 20
NODE_NAME_PREFIX = "Peer_"
KEY_NAME_PREFIX = "key_"
RANDOM_SEED = None  # None: nondeterministic benchmark identifiers

# Evaluation
BENCHMARK_LOOKUPS = 200
BENCHMARK_NODE_COUNTS = [4, 8, 16, 32, 64, 128]
PLOT_DIR = "plots"

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def validate_config(m: int = M, num_nodes: int = NUM_NODES, num_keys: int = NUM_KEYS):
    """Validate simulation configuration."""
    ring_size = 2 ** m
    return {
        "m": m,
        "ring_size": ring_size,
        "nodes": num_nodes,
        "keys": num_keys,
        "hop_limit": HOP_LIMIT_FACTOR * max(1, m) + ring_size,
        # More nodes than identifiers guarantees hash collisions
        "valid": m >= 1 and 0 < num_nodes <= ring_size and num_keys >= 0,
    }


if __name__ == "__main__":
    config = validate_config()
    print("Chord Configuration:")
    print(f"  Identifier Space: 2^{config['m']} = {config['ring_size']}")
    print(f"  Nodes: {config['nodes']}")
    print(f"  Keys: {config['keys']}")
    print(f"  Hop Limit: {config['hop_limit']}")
    print(f"  Valid: {config['valid']}")
