"""Forum Stage: post interaction core of a community discussion service."""
