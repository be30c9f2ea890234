from flowmatch.lib.nx import EdgeMap, NodeMap, from_networkx, read_edgelist, to_networkx

__all__ = ["EdgeMap", "NodeMap", "from_networkx", "read_edgelist", "to_networkx"]
