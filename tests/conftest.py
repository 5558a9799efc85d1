"""Shared fixtures: a small user/post schema."""

import pytest

from gqlb.core.builder import create_builder
from gqlb.core.parser import SchemaParser

SCHEMA_SDL = """
scalar DateTime

enum Role {
  ADMIN
  USER
  GUEST
}

interface Node {
  id: ID!
}

type Location {
  city: String
  country: String
}

type Profile {
  bio: String
  avatar: String
  location: Location
}

type Post implements Node {
  id: ID!
  title: String!
  content: String
  author: User!
}

type User implements Node {
  id: ID!
  name: String!
  email: String
  age: Int
  role: Role!
  createdAt: DateTime
  avatarUrl(size: Int!): String
  profile: Profile
  posts(first: Int): [Post!]!
  friends: [User!]!
}

union SearchResult = User | Post

input StringFilter {
  contains: String
  equals: String
}

input IntFilter {
  gte: Int
  lt: Int
}

input UserFilter {
  name: StringFilter
  age: IntFilter
  role: Role
  ids: [ID!]
}

input LocationInput {
  city: String!
  country: String
}

input ProfileInput {
  bio: String
  location: LocationInput
}

input CreateUserInput {
  name: String!
  email: String!
  role: Role
  profile: ProfileInput
}

type Query {
  user(id: ID!): User
  users(filter: UserFilter, limit: Int = 10): [User!]!
  searchUsers(filter: UserFilter!): [User!]!
  search(term: String!): [SearchResult!]!
  node(id: ID!): Node
  serverTime: DateTime!
}

type Mutation {
  createUser(input: CreateUserInput!): User!
  deleteUser(id: ID!): Boolean!
}

type Subscription {
  userCreated(role: Role): User!
}
"""


@pytest.fixture
def schema():
    """The test schema as IR."""
    return SchemaParser.from_sdl(SCHEMA_SDL)


@pytest.fixture
def builder(schema):
    """A query builder over the test schema."""
    return create_builder(schema)
