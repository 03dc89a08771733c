"""Line-oriented console front end for the blackjack engine."""
