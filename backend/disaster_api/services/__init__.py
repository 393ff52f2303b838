"""Services Layer - the Disaster Resource Service (imperative shell).

Invariants:
    - Every operation takes the Caller explicitly
    - Order per operation: referential checks -> lookup -> authorize -> mutate
    - Mutations run inside unit_of_work (commit once or roll back everything)

Design Decisions:
    - Decisions (sync plans, count merges, policies) delegated to pure core/ functions
"""
