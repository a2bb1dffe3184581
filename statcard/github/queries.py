USER_STATS_QUERY = """
query($login: String!, $after: String, $from: DateTime){
  user(login: $login){
    name
    login
    contributionsCollection(from: $from){
      totalCommitContributions
      totalPullRequestReviewContributions
    }
    pullRequests(first: 1){ totalCount }
    mergedPullRequests: pullRequests(states: MERGED){ totalCount }
    openIssues: issues(states: OPEN){ totalCount }
    closedIssues: issues(states: CLOSED){ totalCount }
    followers{ totalCount }
    repositoryDiscussions{ totalCount }
    repositoryDiscussionComments(onlyAnswers: true){ totalCount }
    repositories(first: 100, ownerAffiliations: OWNER, orderBy: {direction: DESC, field: STARGAZERS}, after: $after){
      totalCount
      nodes{
        name
        stargazers{ totalCount }
      }
      pageInfo{ hasNextPage endCursor }
    }
  }
}"""

USER_REPOS_QUERY = """
query($login: String!, $after: String){
  user(login: $login){
    repositories(first: 100, ownerAffiliations: OWNER, orderBy: {direction: DESC, field: STARGAZERS}, after: $after){
      totalCount
      nodes{
        name
        stargazers{ totalCount }
      }
      pageInfo{ hasNextPage endCursor }
    }
  }
}"""

USER_LANGUAGES_QUERY = """
query($login: String!, $after: String){
  user(login: $login){
    repositories(ownerAffiliations: OWNER, isFork: false, first: 100, after: $after){
      nodes{
        name
        languages(first: 10, orderBy: {field: SIZE, direction: DESC}){
          edges{
            size
            node{ color name }
          }
        }
      }
      pageInfo{ hasNextPage endCursor }
    }
  }
}"""
