from doc_advisor.domain.models import LibraryCandidate
from doc_advisor.research.resolver import is_exact_match, library_id_for, rank_candidates, select_library


def test_higher_snippet_count_wins_with_equal_reputation():
    candidates = [
        LibraryCandidate(id="/reactjs/react.dev", title="React", snippet_count=1200, trust_score=9.0),
        LibraryCandidate(id="/facebook/react", title="React", snippet_count=3400, trust_score=9.0),
    ]
    assert select_library("React", candidates).id == "/facebook/react"


def test_exact_match_beats_snippet_count():
    candidates = [
        LibraryCandidate(id="/pmndrs/react-three-fiber", title="React Three Fiber", snippet_count=9000, trust_score=9.5),
        LibraryCandidate(id="/facebook/react", title="React", snippet_count=100, trust_score=5.0),
    ]
    assert select_library("react", candidates).id == "/facebook/react"


def test_trust_score_breaks_remaining_ties():
    candidates = [
        LibraryCandidate(id="/a/lib", title="lib", snippet_count=10, trust_score=3.0),
        LibraryCandidate(id="/b/lib", title="lib", snippet_count=10, trust_score=8.0),
    ]
    assert [c.id for c in rank_candidates("lib", candidates)] == ["/b/lib", "/a/lib"]


def test_exact_match_ignores_separators_and_uses_id_segment():
    candidate = LibraryCandidate(id="/vercel/next.js", title="Next.js Framework")
    assert is_exact_match("nextjs", candidate)
    assert not is_exact_match("nuxt", candidate)


def test_select_library_empty():
    assert select_library("React", []) is None


def test_library_id_for_known_version():
    candidate = LibraryCandidate(id="/vercel/next.js", title="Next.js", versions=["v14.3.0", "v15.1.0"])
    assert library_id_for(candidate, "14.3.0") == "/vercel/next.js/v14.3.0"
    assert library_id_for(candidate, "v9") == "/vercel/next.js"
    assert library_id_for(candidate, None) == "/vercel/next.js"
