"""
game_context.py
---------------
In-memory session context for Needle Stop.
Tracks rounds played, best single-player score, perfect stops and
two-player results for as long as the process runs. Nothing is saved.
"""


class GameContext:
    def __init__(self):
        self.stats = {
            "rounds": 0,
            "best_score": None,
            "perfects": 0,
            "wins": [0, 0],  # two-player wins for Player 1 / Player 2
            "ties": 0,
            "total_time": 0.0,  # seconds spent in the minigame
        }

        self.flags = {}  # launch options (two_player, period_ms, ...)
        self.last_result = {}  # filled after each completed round

    # -----------------------------------------------------
    #   Core logic
    # -----------------------------------------------------
    def apply_result(self):
        """Fold the most recent round result into the session stats."""
        if not self.last_result:
            return

        details = self.last_result.get("details") or {}
        scores = [s for s in details.get("scores", ()) if s is not None]
        if not scores:
            return

        self.stats["rounds"] += 1
        best = self.stats["best_score"]
        top = max(scores)
        self.stats["best_score"] = top if best is None else max(best, top)
        self.stats["perfects"] += sum(1 for s in scores if s == 100)

        outcome = self.last_result.get("outcome", "")
        if outcome == "player1":
            self.stats["wins"][0] += 1
        elif outcome == "player2":
            self.stats["wins"][1] += 1
        elif outcome == "tie":
            self.stats["ties"] += 1

    def add_playtime(self, dt):
        """Add delta-time (in seconds) to total runtime."""
        self.stats["total_time"] += dt

    def summary(self):
        return {
            "stats": self.stats,
            "flags": self.flags,
            "last_result": self.last_result,
        }

    def __repr__(self):
        return (
            f"<GameContext rounds={self.stats['rounds']} "
            f"best={self.stats['best_score']} perfects={self.stats['perfects']} "
            f"wins={self.stats['wins'][0]}-{self.stats['wins'][1]} "
            f"ties={self.stats['ties']} time={self.stats['total_time']:.1f}s>"
        )
