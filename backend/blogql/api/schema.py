"""
GraphQL schema for the blog API.

The SDL lives in ``type_defs``; resolvers are bound from the modules in
``blogql.api.resolvers``. Field and argument names are camelCase in the
schema and snake_case in Python (``convert_names_case``).
"""

from ariadne import ScalarType, make_executable_schema

from blogql.api.resolvers import auth, posts, users

type_defs = """
scalar DateTime

type User {
  id: Int!
  name: String!
  email: String!
  isAdmin: Boolean!
  createdAt: DateTime
  updatedAt: DateTime
  posts: [Post!]!
}

type Post {
  id: Int!
  title: String!
  body: String!
  image: String!
  createdAt: DateTime
  updatedAt: DateTime
  author: User!
}

type LoginResponse {
  token: String!
  user: User!
}

type Query {
  me: User!
  posts: [Post!]!
  post(postId: Int!): Post!
}

type Mutation {
  signup(name: String!, email: String!, password: String!): User!
  login(email: String!, password: String!): LoginResponse!

  createPost(title: String!, body: String!, image: String!): Post!
  updatePost(postId: Int!, title: String!, body: String!, image: String!): Post!
  removePost(postId: Int!): String!

  updateProfile(id: Int!, email: String!, name: String!): User!
  removeProfile(id: Int!): String!
  changePassword(id: Int!, oldPassword: String!, newPassword: String!): User!
}
"""

datetime_scalar = ScalarType("DateTime")


@datetime_scalar.serializer
def serialize_datetime(value):
    return value.isoformat() if value else None


schema = make_executable_schema(
    type_defs,
    auth.query,
    auth.mutation,
    posts.query,
    posts.mutation,
    users.mutation,
    datetime_scalar,
    convert_names_case=True,
)
