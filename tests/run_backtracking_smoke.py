import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import nqueens.backtracking as back

print("Module loaded:", back)

for strategy in back.STRATEGIES:
    print(f"Running solve(8, strategy={strategy!r})")
    result = back.solve(8, strategy=strategy, time_limit=2.0)
    print(f"  -> complete? {result.complete}, solutions={result.size()}, nodes={result.nodes_explored}, elapsed={result.elapsed:.4f}s")
    if result.size():
        assert len(result[0]) == 8
        print("  -> first solution:", list(result[0]))

print("Smoke test finished.")
