if __name__ == "__main__":
    import time

    import numpy as np

    from bmo.board import apply_move, new_board
    from bmo.maze import MazeGenerator
    from bmo.search import MinimaxEngine
    from bmo.types import O, X

    print("=== SEARCH BENCHMARK ===")
    positions = [("empty board, O to move", new_board(), O),
                 ("empty board, X to move", new_board(), X),
                 ("X in the corner", apply_move(new_board(), 0, X), O),
                 ("X in the centre", apply_move(new_board(), 4, X), O)]

    for label, board, player in positions:
        results = {}
        for pruning in (False, True):
            engine = MinimaxEngine(use_pruning=pruning)
            start = time.time()
            score, move = engine.search(board, player)
            results[pruning] = (score, move, engine.stats.nodes, engine.stats.cutoffs, time.time() - start)
        full, pruned = results[False], results[True]
        assert full[:2] == pruned[:2], "pruning changed the chosen move"
        print(f"\n{label}: move={pruned[1]} score={pruned[0]}")
        print('  minimax:    {:>7} nodes  {:.3f}s'.format(full[2], full[4]))
        print('  alpha-beta: {:>7} nodes  {:.3f}s  ({} cutoffs, {:.1%} of full tree)'.format(
            pruned[2], pruned[4], pruned[3], pruned[2] / full[2]))

    print("\n=== MAZE BENCHMARK ===")
    for strategy in ("backtracker", "patterns"):
        gen = MazeGenerator(seed=0, strategy=strategy)
        start = time.time()
        grids = [gen.generate(level, 15) for level in range(100)]
        elapsed = time.time() - start
        attempts = [g.attempts for g in grids]
        print('{:<12} 100 mazes in {:.3f}s  mean attempts {:.2f}  max {}  repaired walls {}'.format(
            strategy, elapsed, float(np.mean(attempts)), max(attempts),
            sum(g.repaired_walls for g in grids)))
