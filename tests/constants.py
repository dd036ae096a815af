from domain.group import PersonId

ALICE = PersonId("alice")
BOB = PersonId("bob")
CHARLIE = PersonId("charlie")
DAVE = PersonId("dave")
OUTSIDER = PersonId("outsider")
