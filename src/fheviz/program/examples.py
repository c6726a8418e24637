"""Built-in example program used by the demo viewer and the CLI.

``SAMPLE_PAYLOAD`` is a BFV program as serialized by the debugging runtime:
four encrypted inputs, three products (each relinearized), one sum and two
outputs. ``SAMPLE_SOURCE`` is the source text it was compiled from.
"""

from __future__ import annotations

import json

from fheviz.program.graph import ProgramGraph

SAMPLE_PAYLOAD = json.loads(
    """{"graph":{"graph":{"nodes":[
    {"operation":{"InputCiphertext":0}},{"operation":{"InputCiphertext":1}},
    {"operation":{"InputCiphertext":2}},{"operation":{"InputCiphertext":3}},
    {"operation":"Multiply"},{"operation":"Multiply"},{"operation":"Multiply"},
    {"operation":"Add"},{"operation":"OutputCiphertext"},{"operation":"OutputCiphertext"},
    {"operation":"Relinearize"},{"operation":"Relinearize"},{"operation":"Relinearize"}],
    "node_holes":[],"edge_property":"directed",
    "edges":[[0,4,"Left"],[3,4,"Right"],[1,5,"Left"],[2,5,"Right"],[1,6,"Left"],
    [3,6,"Right"],[12,7,"Left"],[10,7,"Right"],[7,8,"Unary"],[11,9,"Unary"],
    [5,10,"Unary"],[6,11,"Unary"],[4,12,"Unary"]]}},"data":"Bfv"}"""
)

SAMPLE_SOURCE = """\
#[fhe_program(scheme = "bfv")]
fn cross_terms(
    a: Cipher<Signed>,
    b: Cipher<Signed>,
    c: Cipher<Signed>,
    d: Cipher<Signed>,
) -> (Cipher<Signed>, Cipher<Signed>) {
    let ad = a * d;
    let bc = b * c;
    let bd = b * d;
    (ad + bc, bd)
}
"""

# (line, (left slot, right slot)) for each product statement in SAMPLE_SOURCE
SAMPLE_PRODUCT_LINES: dict[int, tuple[int, int]] = {
    8: (0, 3),
    9: (1, 2),
    10: (1, 3),
}


def sample_graph() -> ProgramGraph:
    """The compiled form of SAMPLE_SOURCE."""
    return ProgramGraph.from_dict(SAMPLE_PAYLOAD)


def product_graph(left_slot: int, right_slot: int) -> ProgramGraph:
    """The nodes one ``let x = a * b;`` statement compiles to."""
    return ProgramGraph.from_dict(
        {
            "nodes": [
                {"operation": {"InputCiphertext": left_slot}},
                {"operation": {"InputCiphertext": right_slot}},
                {"operation": "Multiply"},
                {"operation": "Relinearize"},
            ],
            "edges": [[0, 2, "Left"], [1, 2, "Right"], [2, 3, "Unary"]],
        }
    )
