"""HTTP front end for gridedit."""
