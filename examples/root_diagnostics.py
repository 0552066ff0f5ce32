from __future__ import annotations


def main() -> None:
    # [START README_ROOT_DIAGNOSTICS]
    import math

    from rdsearch import (
        BracketPolicy,
        RootFindingConfig,
        discrete_minimize_result,
        find_zero_result,
    )
    from rdsearch.numerics import RootMethod

    cfg = RootFindingConfig(root_method=RootMethod.BISECTION, max_doublings=200)

    rr = find_zero_result(
        lambda x: math.log(x) - 3.0, policy=BracketPolicy.POSITIVE_ONLY, config=cfg
    )
    print(f"Root: {rr.root:.12f}")
    print(f"Converged: {rr.converged}  iters={rr.iterations}  method={rr.method}")
    print(f"f(root)={rr.f_at_root:.3e}  bracket={rr.bracket}")

    xs = list(range(1, 10_001))
    ds = discrete_minimize_result(lambda x: math.floor(abs(x - 5000) / 37), xs)
    print(f"Choice: {ds.value}  evaluations={ds.evaluations}  window={ds.window}")
    # [END README_ROOT_DIAGNOSTICS]


if __name__ == "__main__":
    main()
