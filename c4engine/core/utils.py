def format_info(strategy, budget, move, nodes, elapsed, score=None):
    move_str = "-" if move is None else str(move)
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    score_str = "-" if score is None else str(score)

    return (
        f"info strategy {strategy} budget {budget} bestmove {move_str} "
        f"nodes {nodes} nps {nps} time {int(elapsed * 1000)} score {score_str}"
    )
