from __future__ import annotations


def main() -> None:
    # [START README_QUICKSTART]
    import numpy as np

    from rdsearch import BracketPolicy, discrete_minimize, find_zero, rd_data

    rng = np.random.default_rng(0)
    margin = rng.uniform(-50.0, 50.0, size=2_000)
    vote = 45.0 + 0.2 * margin + 5.0 * (margin >= 0) + rng.normal(0, 8, size=2_000)
    d = rd_data({"vote": vote, "margin": margin}, cutoff=0.0)

    # Smallest bandwidth with 500 effective observations on each side
    def shortfall(h: float) -> float:
        n = min(np.sum(d.x_plus <= h), np.sum(-d.x_minus <= h))
        return float(n) - 499.5

    h = find_zero(shortfall, policy=BracketPolicy.POSITIVE_ONLY)
    print("h:", h)

    # Best bandwidth on a grid for a piecewise-constant criterion
    grid = np.linspace(1.0, 50.0, 2_000)
    target = 750

    def imbalance(b: float) -> float:
        return abs(int(np.sum(d.x_plus <= b)) - target)

    print("grid choice:", discrete_minimize(imbalance, grid))
    # [END README_QUICKSTART]


if __name__ == "__main__":
    main()
