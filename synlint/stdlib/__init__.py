"""Components that ship with synlint, starting with the rule catalog."""
