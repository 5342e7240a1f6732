"""Library models: tracks, episodes, artists, albums, shows, playlists and playables."""