# services/stopwords.py
"""
Stopword sets
-------------
Two curated tiers, merged into STOPWORDS:
1. BASE_STOPWORDS  - English function words plus generic academic boilerplate
2. EXTRA_STOPWORDS - platform, article-furniture and catalog terms that are
                     frequent in scraped research pages but never topical

Contractions are left out: normalization replaces apostrophes with spaces,
so they can never reach the membership test.
"""

BASE_STOPWORDS = frozenset("""
a about above after again against all am an and any are as at
be because been before being below between both but by cannot could
did do does doing down during each few for from further
had has have having he her here hers herself him himself his how
i if in into is it its itself me more most my myself
no nor not of off on once only or other ought our ours ourselves out over own
same she should so some such than that the their theirs them themselves then
there these they this those through to too under until up very
was we were what when where which while who whom why with would
you your yours yourself yourselves
using used use result results method methods conclusion study studies based
analysis paper approach new also well show shown showed may might can
however therefore within among across found significant significantly
present presented proposed provide provided provides per via et al
system systems different including similar type total group groups
one two three open file information values min day days time
""".split())

EXTRA_STOPWORDS = frozenset("""
doi google scholar pubmed pmc sci biol physiol microbiol res
article articles fig figure table tab supplementary free dataset datasets
file files information data model models test reads open find number
values sample samples
usa university center international york cornell
nasa iss mission missions genelab
state potential identified performed
""".split())

STOPWORDS = BASE_STOPWORDS | EXTRA_STOPWORDS


def is_stopword(token: str) -> bool:
    return token in STOPWORDS
