"""Hypothesis strategies for property testing.

Provides reusable strategies for generating operational role lists and
claims snapshots.
"""

from hypothesis import strategies as st

from src.scheduler.shared.auth.claims import ClaimsSnapshot
from src.scheduler.shared.auth.enums import VALID_OPERATIONAL_ROLES

# Role-like tokens: no delimiter and no surrounding whitespace
role_names = st.text(
    alphabet=st.characters(
        exclude_categories=("Cs", "Cc", "Zs", "Zl", "Zp"),
        exclude_characters=",",
    ),
    min_size=1,
    max_size=20,
).filter(lambda s: s == s.strip())

catalog_roles = st.sampled_from(sorted(VALID_OPERATIONAL_ROLES))


@st.composite
def role_strings(draw):
    """Generate stored role strings with padding and empty segments."""
    segments = draw(
        st.lists(
            st.one_of(
                role_names,
                role_names.map(lambda r: f" {r} "),
                st.just(""),
                st.just("  "),
            ),
            max_size=8,
        )
    )
    return ",".join(segments)


@st.composite
def claims_snapshots(draw):
    """Generate authenticated or anonymous claims snapshots."""
    return ClaimsSnapshot(
        is_authenticated=draw(st.booleans()),
        is_staff_claim=draw(st.one_of(st.none(), st.sampled_from(["true", "false", "x"]))),
        operational_roles=draw(st.one_of(st.none(), role_strings())),
    )
