"""Static vocabularies."""

STOPWORDS = frozenset(
    """
    aan al alle als alsof bij bijv dan dat de deze die dit doch doen door dus een
    en er ernaar geen haar had heb hebben heeft hem het hier hij hoe hun ik in is
    je kan kon kunnen maar me meer men met mij mijn moet na naar niet niets nog
    nu of om omdat ons ook op over reeds te tegen toch toen tot u uit uw van veel
    voor want waren was wat we wel werd wezen wie wil worden wordt zal ze zelf zich
    zij zijn zo zonder zou
    """.split()
)
