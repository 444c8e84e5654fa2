from typing import Dict, Sequence

import networkx as nx

from .models import ClassSpec, HOMEROOM, STAFF


def build_resource_graph(classes: Sequence[ClassSpec]) -> nx.Graph:
    """Bipartite demand graph: class nodes linked to the teachers and rooms they need.

    Edge weight is the number of weekly periods the class needs from that
    resource. Sentinel teacher/room are left out since they are never contended.
    """
    G = nx.Graph()
    for cls in classes:
        cnode = ("class", cls.name)
        G.add_node(cnode, kind="class")
        for subj, count in cls.subjects.items():
            for kind, res, sentinel in (("teacher", cls.teacher_for(subj), STAFF),
                                        ("room", cls.room_for(subj), HOMEROOM)):
                if res == sentinel:
                    continue
                rnode = (kind, res)
                G.add_node(rnode, kind=kind)
                if G.has_edge(cnode, rnode):
                    G[cnode][rnode]["weight"] += count
                else:
                    G.add_edge(cnode, rnode, weight=count)
    return G


def resource_loads(G: nx.Graph) -> Dict[tuple, int]:
    """Weekly periods demanded of each teacher/room across all classes."""
    return {n: int(G.degree(n, weight="weight"))
            for n, data in G.nodes(data=True) if data.get("kind") != "class"}
