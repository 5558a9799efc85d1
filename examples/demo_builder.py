#!/usr/bin/env python3
"""Demonstration of the schema-driven query builder.

This script shows how to:
1. Parse a GraphQL schema
2. Select fields by navigating the schema
3. Use variables, aliases and wildcard selections

Note: This demo doesn't make real API calls - it just prints the
operations the builder produces.
"""

from gqlb import create_builder, optional, required

SCHEMA = """
type Query {
  user(id: ID!): User
  users(limit: Int): [User!]!
}

type Mutation {
  renameUser(id: ID!, name: String!): User
}

type User {
  id: ID!
  name: String!
  profile: Profile
}

type Profile {
  bio: String
  location: Location
}

type Location {
  city: String
  country: String
}
"""


def main():
    print("=== Query Builder Demo ===\n")

    builder = create_builder(SCHEMA)

    print("1. Explicit selection")
    op = builder.query(lambda q: [
        q.user({"id": "42"}, lambda u: [u.id, u.name]),
    ])
    print(op.text)

    print("\n2. Named query with a required variable")
    op = builder.query.GetUser(lambda q: [
        q.user({"id": required("userId")}, lambda u: [u.name, u.profile.bio]),
    ])
    print(op.text)
    print(f"   Variables: {', '.join(str(v) for v in op.variables)}")

    print("\n3. Wildcard: a bare object field selects everything below it")
    op = builder.query(lambda q: [
        q.user({"id": "42"}, lambda u: [u.profile]),
    ])
    print(op.text)

    print("\n4. Aliases with a dict selection")
    op = builder.query(lambda q: {
        "first": q.user({"id": "1"}, lambda u: [*u["*"]]),
        "rest": q.users({"limit": optional("limit")}, lambda u: [u.id]),
    })
    print(op.text)

    print("\n5. Mutation")
    op = builder.mutation(lambda m: [
        m.renameUser({"id": required("id"), "name": required("name")}, lambda u: [u.name]),
    ])
    print(op.text)
    print(f"   Request variables: {op.variable_values(id='42', name='Ada')}")


if __name__ == "__main__":
    main()
