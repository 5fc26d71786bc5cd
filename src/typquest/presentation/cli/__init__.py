"""Console front end for TypQuest."""
