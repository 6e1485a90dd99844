"""
ae_triage: Adverse Event Risk Triage

Scores a patient transcript for adverse drug event risk:

    Transcript → Medical entities → openFDA reaction matches + High-risk vocabulary → Risk level

Core constraints:
- Stateless per request (no caching or persistence of reports)
- Corpus outages degrade to "no matches", extraction failures do not
- Risk score comes from the high-risk vocabulary only, never from matches
"""

__version__ = "0.1.0"
